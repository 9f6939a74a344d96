"""
表达式解析器 - {{ }} 内部文本 -> 语法树

语法：
    expr     := primary "||" expr | call | column
    call     := NAME "(" [arg ("," arg)*] ")"
    arg      := quoted | expr-with-"||" | call | number | column-or-literal

参数扫描为单次从左到右的字符扫描，跟踪：
- 引号状态（" 或 '，同种引号闭合；顶层引号去除，内容按字面量处理）
- 括号深度（嵌套函数整体保留）
- 仅顶层逗号作为参数分隔符
"""

from __future__ import annotations

from functools import lru_cache

from ..interfaces import ExpressionSyntaxError
from .ast import ColumnRef, DefaultOp, FunctionCall, Literal, Node
from .coercion import parse_number

QUOTES = ("\"", "'")
DEFAULT_OPERATOR = "||"


@lru_cache(maxsize=2048)
def parse_expression(text: str) -> Node:
    """解析单个表达式（已去掉 {{ }}）"""
    expr = text.strip()

    idx = find_top_level(expr, DEFAULT_OPERATOR)
    if idx >= 0:
        primary = expr[:idx].strip()
        alternative = expr[idx + len(DEFAULT_OPERATOR):].strip()
        return DefaultOp(
            primary=parse_expression(primary),
            alternative=parse_expression(alternative),
            alternative_text=alternative,
        )

    if "(" in expr:
        return parse_call(expr)

    return ColumnRef(expr)


def parse_call(text: str) -> FunctionCall:
    """解析函数调用 NAME(arg1, arg2, ...)"""
    expr = text.strip()
    open_idx = expr.index("(")
    close_idx = expr.rfind(")")
    if close_idx < open_idx:
        raise ExpressionSyntaxError(f"缺少右括号: {expr}")
    if expr[close_idx + 1:].strip():
        raise ExpressionSyntaxError(f"函数调用后有多余内容: {expr}")

    name = expr[:open_idx].strip().upper()
    inner = expr[open_idx + 1:close_idx]
    args = tuple(_parse_arg(arg, quoted) for arg, quoted in split_args(inner))
    return FunctionCall(name=name, args=args)


def split_args(inner: str) -> list[tuple[str, bool]]:
    """
    按顶层逗号拆分参数

    Returns:
        [(参数文本, 是否含引号)]；末尾空参数丢弃
    """
    if not inner.strip():
        return []

    args: list[tuple[str, bool]] = []
    pieces: list[tuple[str, bool]] = []
    buf = ""
    depth = 0
    quote: str | None = None

    for ch in inner:
        if quote is not None:
            if ch == quote:
                quote = None
                if depth > 0:
                    buf += ch
                else:
                    pieces.append((buf, True))
                    buf = ""
            else:
                buf += ch
            continue

        if ch in QUOTES:
            quote = ch
            if depth > 0:
                buf += ch
            else:
                pieces.append((buf, False))
                buf = ""
            continue

        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            pieces.append((buf, False))
            args.append(_join_pieces(pieces))
            pieces, buf = [], ""
            continue

        buf += ch

    if quote is not None:
        raise ExpressionSyntaxError(f"引号未闭合: {inner}")

    pieces.append((buf, False))
    last = _join_pieces(pieces)
    if last[0] or last[1]:
        args.append(last)
    return args


def find_top_level(text: str, token: str) -> int:
    """查找引号/括号之外的首个token位置，未找到返回-1"""
    depth = 0
    quote: str | None = None
    i = 0
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in QUOTES:
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif depth == 0 and text.startswith(token, i):
            return i
        i += 1
    return -1


def _join_pieces(pieces: list[tuple[str, bool]]) -> tuple[str, bool]:
    """合并参数片段，只去除引号外的首尾空白"""
    texts = [t for t, _ in pieces]
    flags = [q for _, q in pieces]

    for i in range(len(texts)):
        if flags[i]:
            break
        texts[i] = texts[i].lstrip()
        if texts[i]:
            break
    for i in reversed(range(len(texts))):
        if flags[i]:
            break
        texts[i] = texts[i].rstrip()
        if texts[i]:
            break

    return "".join(texts), any(flags)


def _parse_arg(text: str, quoted: bool) -> Node:
    """参数 -> 节点：引号文本/嵌套函数/数字/列引用（缺失时按字面量）"""
    if quoted or text == "":
        return Literal(text)
    if find_top_level(text, DEFAULT_OPERATOR) >= 0:
        return parse_expression(text)
    if "(" in text:
        return parse_call(text)
    if parse_number(text) is not None:
        return Literal(text)
    return ColumnRef(text, fallback=text)
