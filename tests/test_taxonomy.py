"""이 파일은 .py 테스트 모듈로 SWC→CWE 태그 확장을 검증합니다."""

from pathlib import Path

import pytest

from contract_inspector.core.errors import RuleCatalogError
from contract_inspector.core.taxonomy import TaxonomyIndex, first_cwe, normalize_tag


def test_mapping_expands_swc_to_cwe() -> None:
    index = TaxonomyIndex.from_default()
    expanded = index.expand_tags(["SWC-107"])
    assert expanded == ["SWC-107", "CWE-841"]


def test_expand_tags_normalizes_and_deduplicates() -> None:
    index = TaxonomyIndex({"SWC-105": {"CWE-284"}, "SWC-106": {"CWE-284"}})
    expanded = index.expand_tags([" swc-105 ", "SWC-106", "SWC-105", ""])
    assert expanded == ["SWC-105", "CWE-284", "SWC-106"]


def test_unknown_tags_pass_through() -> None:
    index = TaxonomyIndex.from_default()
    assert index.expand_tags(["custom-tag", "SWC-999"]) == ["CUSTOM-TAG", "SWC-999"]


def test_from_file_merges_repeated_codes(tmp_path: Path) -> None:
    path = tmp_path / "mapping.yml"
    path.write_text(
        "mappings:\n"
        "  - swc: swc-104\n"
        "    cwe: [CWE-252]\n"
        "  - swc: SWC-104\n"
        "    cwe: [cwe-20, CWE-252]\n"
        "  - swc: KISA:U-01\n"
        "    cwe: [CWE-1]\n",
        encoding="utf-8",
    )
    index = TaxonomyIndex.from_file(path)
    assert index.cwe_by_swc == {"SWC-104": ("CWE-20", "CWE-252")}


def test_from_file_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "mapping.yml"
    path.write_text("mappings: [unclosed", encoding="utf-8")
    with pytest.raises(RuleCatalogError):
        TaxonomyIndex.from_file(path)


def test_first_cwe() -> None:
    assert first_cwe(["SWC-104", "cwe-252", "CWE-829"]) == "CWE-252"
    assert first_cwe(["SWC-104"]) is None
    assert normalize_tag(None) == ""
