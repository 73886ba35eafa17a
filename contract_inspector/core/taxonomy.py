"""이 파일은 .py 택소노미 모듈로 SWC 레지스트리 코드를 CWE 식별자로 연결합니다."""

import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from .config import DEFAULT_MAPPING_FILE
from .errors import RuleCatalogError

SWC_CODE_PATTERN = re.compile(r"^SWC-\d{3}$")
CWE_CODE_PATTERN = re.compile(r"^CWE-\d{1,4}$")


def normalize_tag(tag: Optional[str]) -> str:
    return str(tag).strip().upper() if tag else ""


class TaxonomyIndex:
    """SWC 코드마다 정렬된 CWE 식별자 튜플을 보관한다."""

    def __init__(self, cwe_by_swc: Mapping[str, Iterable[str]]) -> None:
        table: Dict[str, Tuple[str, ...]] = {}
        for swc, cwes in cwe_by_swc.items():
            cleaned = {normalize_tag(cwe) for cwe in cwes} - {""}
            table[normalize_tag(swc)] = tuple(sorted(cleaned))
        self.cwe_by_swc = table

    @classmethod
    def from_file(cls, path: Path) -> "TaxonomyIndex":
        # 같은 SWC 코드가 여러 번 나오면 CWE 목록을 합친다. SWC 형식이 아닌 키는 버린다.
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise RuleCatalogError(f"Invalid YAML in {path}: {exc}") from exc

        merged: Dict[str, List[str]] = {}
        for item in data.get("mappings") or []:
            swc = normalize_tag(item.get("swc"))
            if SWC_CODE_PATTERN.match(swc):
                merged.setdefault(swc, []).extend(item.get("cwe") or [])
        return cls(merged)

    @classmethod
    def from_default(cls) -> "TaxonomyIndex":
        if DEFAULT_MAPPING_FILE.exists():
            return cls.from_file(DEFAULT_MAPPING_FILE)
        return cls({})

    def expand_tags(self, tags: Iterable[str]) -> List[str]:
        # 각 SWC 태그 바로 뒤에 대응 CWE를 붙이고, 중복은 처음 위치만 남긴다.
        ordered: List[str] = []
        for tag in map(normalize_tag, tags):
            if tag:
                ordered.append(tag)
                ordered.extend(self.cwe_by_swc.get(tag, ()))
        return list(dict.fromkeys(ordered))


def first_cwe(tags: Iterable[str]) -> Optional[str]:
    for tag in map(normalize_tag, tags):
        if CWE_CODE_PATTERN.match(tag):
            return tag
    return None
