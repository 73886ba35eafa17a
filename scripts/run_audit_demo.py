"""이 파일은 .py 감사 데모 실행 스크립트로 샘플 컨트랙트 분석 결과를 출력합니다."""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from contract_inspector.core.logging import setup_logging
from contract_inspector.services.analyzer import analyze
from contract_inspector.services.reporting import render_text_report

SAMPLES = ["VulnerableVault.sol", "SafeToken.sol"]


def main() -> None:
    setup_logging()
    for name in SAMPLES:
        source = (REPO_ROOT / "samples" / name).read_text(encoding="utf-8")
        report = analyze(source)
        print(f"# {name}")
        print(render_text_report(report))


if __name__ == "__main__":
    main()
