"""이 파일은 .py 명령행 모듈로 파일 단위 보안 분석과 룰 목록 출력을 제공합니다."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from contract_inspector.core.catalog import RuleCatalog, weight_of
from contract_inspector.core.config import DEFAULT_RULES_FILE, LOG_LEVEL
from contract_inspector.core.errors import InputError, RuleCatalogError
from contract_inspector.core.logging import setup_logging
from contract_inspector.core.types import AnalysisReport, Severity
from contract_inspector.services.analyzer import ContractAnalyzer
from contract_inspector.services.reporting import render_markdown_summary, render_text_report

logger = logging.getLogger(__name__)

FAIL_ON_CHOICES = ["critical", "high", "medium", "none"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contract-inspector",
        description="Rule-based static risk analyzer for Solidity contracts",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL)
    parser.add_argument("--rules", default=str(DEFAULT_RULES_FILE), help="Path to a rule catalog YAML file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a Solidity source file")
    analyze_parser.add_argument("path", help="Source file path, or '-' for stdin")
    analyze_parser.add_argument("--format", choices=["text", "json", "markdown"], default="text")
    analyze_parser.add_argument(
        "--fail-on",
        choices=FAIL_ON_CHOICES,
        default="critical",
        help="Exit with status 1 when a finding at or above this severity exists",
    )

    subparsers.add_parser("rules", help="List the rule catalog")
    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _gate_tripped(report: AnalysisReport, fail_on: str) -> bool:
    # 지정한 심각도 이상 결과가 하나라도 있으면 실패로 본다.
    if fail_on == "none":
        return False
    limit = Severity(fail_on).rank
    return any(finding.severity.rank <= limit for finding in report.findings)


def _render(report: AnalysisReport, output_format: str) -> str:
    if output_format == "json":
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False) + "\n"
    if output_format == "markdown":
        return render_markdown_summary(report)
    return render_text_report(report)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        catalog = RuleCatalog.from_file(Path(args.rules))
    except RuleCatalogError as exc:
        parser.error(str(exc))
        return 2

    if args.command == "rules":
        for rule in catalog.get_rules():
            print(f"{rule.rule_id:32} {rule.severity.value:9} w={weight_of(rule.severity):<3} {rule.title}")
        return 0

    if args.command == "analyze":
        try:
            source = _read_source(args.path)
        except (OSError, UnicodeDecodeError) as exc:
            parser.error(f"Cannot read {args.path}: {exc}")
            return 2

        try:
            report = ContractAnalyzer(catalog=catalog).analyze(source)
        except InputError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

        sys.stdout.write(_render(report, args.format))
        if _gate_tripped(report, args.fail_on):
            logger.info("Severity gate '%s' tripped", args.fail_on)
            return 1
        return 0

    parser.error(f"Unsupported command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
