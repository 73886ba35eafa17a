"""이 파일은 .py 테스트 모듈로 명령행 인터페이스의 출력과 종료 코드를 검증합니다."""

import io
import json
from pathlib import Path

import pytest

from contract_inspector import cli

SAMPLES_DIR = Path(__file__).resolve().parents[1] / "samples"


def test_analyze_text_fails_on_critical(capsys) -> None:
    code = cli.main(["analyze", str(SAMPLES_DIR / "VulnerableVault.sol")])
    out = capsys.readouterr().out
    assert code == 1
    assert "VULNERABILITIES FOUND:" in out


def test_analyze_safe_sample_passes(capsys) -> None:
    code = cli.main(["analyze", str(SAMPLES_DIR / "SafeToken.sol"), "--fail-on", "high"])
    assert code == 0
    assert "No vulnerabilities detected" in capsys.readouterr().out


def test_analyze_json_output(capsys) -> None:
    code = cli.main(["analyze", str(SAMPLES_DIR / "VulnerableVault.sol"), "--format", "json", "--fail-on", "none"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["overall_score"] == 38
    assert payload["deploy_verdict"] == "blocked"


def test_analyze_markdown_from_stdin(capsys, monkeypatch) -> None:
    source = (SAMPLES_DIR / "SafeToken.sol").read_text(encoding="utf-8")
    monkeypatch.setattr("sys.stdin", io.StringIO(source))
    code = cli.main(["analyze", "-", "--format", "markdown"])
    assert code == 0
    assert capsys.readouterr().out.startswith("## Security Audit Report")


def test_fail_on_medium(tmp_path: Path, capsys) -> None:
    path = tmp_path / "Loop.sol"
    path.write_text(
        "// SPDX-License-Identifier: MIT\n"
        "pragma solidity 0.8.20;\n"
        "contract L {\n"
        "    uint[] xs;\n"
        "    constructor() {}\n"
        "    function sum() external view returns (uint t) {\n"
        "        for (uint i = 0; i < xs.length; i++) { t += xs[i]; }\n"
        "    }\n"
        "}\n",
        encoding="utf-8",
    )
    assert cli.main(["analyze", str(path), "--fail-on", "high"]) == 0
    assert cli.main(["analyze", str(path), "--fail-on", "medium"]) == 1
    capsys.readouterr()


def test_empty_source_exit_code(tmp_path: Path, capsys) -> None:
    path = tmp_path / "Empty.sol"
    path.write_text("", encoding="utf-8")
    assert cli.main(["analyze", str(path)]) == 2
    assert "Contract code required" in capsys.readouterr().err


def test_missing_file_is_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["analyze", str(tmp_path / "absent.sol")])
    assert excinfo.value.code == 2


def test_bad_catalog_is_usage_error(tmp_path: Path) -> None:
    path = tmp_path / "rules.yml"
    path.write_text("rules: []\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--rules", str(path), "rules"])
    assert excinfo.value.code == 2


def test_rules_listing(capsys) -> None:
    assert cli.main(["rules"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 14
    assert lines[0].startswith("reentrancy-call-value")


def test_undecodable_source_is_usage_error(tmp_path: Path) -> None:
    path = tmp_path / "Latin1.sol"
    path.write_bytes(b"pragma solidity 0.8.20;\ncontract A { string s = \"Jos\xe9\"; }\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["analyze", str(path)])
    assert excinfo.value.code == 2


def test_undecodable_stdin_is_usage_error(monkeypatch) -> None:
    stream = io.TextIOWrapper(io.BytesIO(b"contract A { string s = \"Jos\xe9\"; }"), encoding="utf-8")
    monkeypatch.setattr("sys.stdin", stream)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["analyze", "-"])
    assert excinfo.value.code == 2
