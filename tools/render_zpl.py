import argparse
import sys
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Render a label design (+ optional data rows) to ZPL."
    )
    parser.add_argument("design", help="设计文件（JSON/YAML）")
    parser.add_argument(
        "--rows",
        default="",
        help="可选：数据行文件（JSON/YAML列表），每行生成一张标签",
    )
    parser.add_argument(
        "--dpi",
        type=int,
        default=0,
        help="打印机分辨率（203/300/600，默认取运行期配置）",
    )
    parser.add_argument(
        "--out",
        default="",
        help="可选：输出文件路径（默认输出到stdout）",
    )
    args = parser.parse_args()

    _add_backend_to_path()
    from label_engine.config import get_config, load_design, load_rows, setup_logging  # type: ignore
    from label_engine.export import ZplGenerator  # type: ignore
    from label_engine.interfaces import BatchTooLargeError, LabelEngineError  # type: ignore
    from label_engine.models import RenderOptions  # type: ignore

    config = get_config()
    setup_logging(config)

    try:
        design = load_design(args.design)
        rows = load_rows(args.rows) if args.rows else [{}]
        max_rows = config.batch.max_rows
        if len(rows) > max_rows:
            raise BatchTooLargeError(f"批量行数{len(rows)}超过上限{max_rows}")
        opts = RenderOptions(dpi=args.dpi or config.render.default_dpi)
        zpl = ZplGenerator(config).generate_batch(design, rows, opts)
    except LabelEngineError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1

    if args.out:
        Path(args.out).write_text(zpl + "\n", encoding="utf-8")
        print(f"{args.out}: labels={len(rows)}")
    else:
        print(zpl)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
