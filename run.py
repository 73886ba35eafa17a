"""이 파일은 .py 엔트리포인트로 명령행 분석기를 실행합니다."""

from contract_inspector.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
