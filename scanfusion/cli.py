"""
Command line interface for ScanFusion.
"""

import argparse
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .core.config import Config
from .core.engine import Engine
from .core.exceptions import ScanFusionError
from .core.utils import setup_logging


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load_from_file(args.config) if args.config else Config.load_default()
    config.update_from_env()

    if getattr(args, "threshold", None) is not None:
        config.alignment = replace(config.alignment, overlap_threshold=args.threshold)
    if getattr(args, "workers", None) is not None:
        config.alignment = replace(config.alignment, workers=args.workers)
    if args.log_level:
        config.logging.level = args.log_level.upper()

    return config


def _cmd_report(args: argparse.Namespace) -> int:
    report_path = Path(args.file).expanduser().resolve()
    if not report_path.is_file():
        print(f"[ERROR] File not found: {report_path}")
        return 2

    config = _load_config(args)
    if not config.validate():
        print("[ERROR] Invalid configuration; see log for details.")
        return 2
    setup_logging(config.logging)

    try:
        report = Engine(config).survey_file(report_path)
    except ScanFusionError as e:
        print(f"[ERROR] {e}")
        return 2

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        for line in report.summary_lines():
            print(line)
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    from .api.app import run_server

    config = _load_config(args)
    setup_logging(config.logging)
    run_server(host=args.host, port=args.port, config=config)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="scanfusion")
    p.add_argument("--config", default=None, help="Path to a YAML or JSON configuration file")
    p.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ...)")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("report", help="Align a scanner report and print the survey figures.")
    r.add_argument("file", help="Path to the scanner report")
    r.add_argument("--threshold", type=int, default=None, help="Minimum shared beacons (default: 12)")
    r.add_argument("--workers", type=int, default=None, help="Worker processes per alignment pass")
    r.add_argument("--json", action="store_true", help="Print the full report as JSON")
    r.set_defaults(func=_cmd_report)

    s = sub.add_parser("serve", help="Run the HTTP API.")
    s.add_argument("--host", default=None, help="Bind address")
    s.add_argument("--port", type=int, default=None, help="Bind port")
    s.set_defaults(func=_cmd_serve)

    args = p.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
