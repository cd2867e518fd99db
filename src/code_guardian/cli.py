from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from code_guardian.config import ConfigError, load_config
from code_guardian.files import ScanRootError, StagedListError
from code_guardian.pipeline import run_scan
from code_guardian.reporting import render_json, render_text, write_report

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FINDINGS = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codeguardian",
        description="Scan project files for sensitive secrets and unused code before you push",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to config file (JSON). Default: .codeguardianrc.json",
    )
    parser.add_argument("-s", "--staged", action="store_true", help="Only scan files staged in git")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--ci",
        action="store_true",
        help="CI mode: exit non-zero on findings and print machine-friendly JSON",
    )
    parser.add_argument("--root", default=".", help="Project directory to scan")
    parser.add_argument("--report-dir", default=None, help="Also write JSON/CSV report files here")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    root = Path(args.root).resolve()
    try:
        config = load_config(args.config, cwd=root)
        result = run_scan(config, root=root, staged=args.staged)
    except (ConfigError, ScanRootError, StagedListError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.ci:
        print(render_json(result))
    else:
        print(render_text(result, root=str(root)))

    if args.report_dir:
        write_report(result, args.report_dir)

    if args.ci and result.has_findings:
        return EXIT_FINDINGS
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
