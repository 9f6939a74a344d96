"""
函数目录 - 供编辑器界面列出可用函数
"""

from __future__ import annotations

from dataclasses import dataclass

from .functions import FunctionName


@dataclass(frozen=True)
class FunctionInfo:
    name: FunctionName
    template: str
    description: str


@dataclass(frozen=True)
class FunctionGroup:
    name: str
    functions: tuple[FunctionInfo, ...]


FUNCTION_GROUPS: tuple[FunctionGroup, ...] = (
    FunctionGroup("Texto", (
        FunctionInfo(FunctionName.MAYUS, "MAYUS(valor)", "Convierte a mayúsculas"),
        FunctionInfo(FunctionName.MINUS, "MINUS(valor)", "Convierte a minúsculas"),
        FunctionInfo(FunctionName.RECORTAR, "RECORTAR(valor, largo)", "Recorta texto"),
        FunctionInfo(FunctionName.CONCAT, "CONCAT(v1, v2)", "Concatena valores"),
        FunctionInfo(FunctionName.REEMPLAZAR, "REEMPLAZAR(valor, buscar, reemplazo)", "Reemplaza texto"),
        FunctionInfo(FunctionName.LARGO, "LARGO(valor)", "Largo del texto"),
    )),
    FunctionGroup("Fechas", (
        FunctionInfo(FunctionName.HOY, "HOY()", "Fecha actual"),
        FunctionInfo(FunctionName.AHORA, "AHORA()", "Fecha y hora actual"),
        FunctionInfo(FunctionName.SUMAR_DIAS, "SUMAR_DIAS(HOY(), 30)", "Suma días a fecha"),
        FunctionInfo(FunctionName.SUMAR_MESES, "SUMAR_MESES(HOY(), 6)", "Suma meses a fecha"),
        FunctionInfo(FunctionName.FORMATO_FECHA, "FORMATO_FECHA(valor, DD/MM/AAAA)", "Formatea fecha"),
    )),
    FunctionGroup("Contadores", (
        FunctionInfo(FunctionName.CONTADOR, "CONTADOR(1, 1, 4)", "Contador secuencial"),
        FunctionInfo(FunctionName.LOTE, "LOTE(AAMM-####)", "Código de lote"),
        FunctionInfo(FunctionName.REDONDEAR, "REDONDEAR(valor, 2)", "Redondea número"),
        FunctionInfo(FunctionName.FORMATO_NUM, "FORMATO_NUM(valor, 2, \",\")", "Formatea número"),
    )),
    FunctionGroup("Condicionales", (
        FunctionInfo(FunctionName.SI, "SI(valor == X, si, no)", "Condición SI/SINO"),
        FunctionInfo(FunctionName.VACIO, "VACIO(valor)", "Verifica si está vacío"),
        FunctionInfo(FunctionName.POR_DEFECTO, "POR_DEFECTO(valor, alternativa)", "Valor por defecto"),
    )),
)


def list_functions() -> list[FunctionInfo]:
    """按分组顺序展开全部函数"""
    return [info for group in FUNCTION_GROUPS for info in group.functions]
