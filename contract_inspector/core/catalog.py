"""이 파일은 .py 룰 카탈로그 모듈로 YAML 룰 정의 로딩과 심각도 가중치 정책을 제공합니다."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from .config import DEFAULT_RULES_FILE
from .config_validation import validate_best_practice, validate_gas_hint, validate_rule_entry
from .detectors import (
    AbsenceDetector,
    CountDetector,
    CustomDetector,
    Detector,
    PresenceDetector,
    compile_pattern,
)
from .errors import RuleCatalogError
from .source import SourceView
from .taxonomy import normalize_tag
from .types import (
    Category,
    GasHint,
    PracticeCheck,
    RiskLevel,
    Rule,
    RuleKind,
    Scope,
    Severity,
)

logger = logging.getLogger(__name__)

# 심각도별 가중치와 위험 등급 기준은 분류 결과를 바꾸는 정책 상수이다.
SEVERITY_WEIGHTS: Dict[Severity, int] = {
    Severity.CRITICAL: 10,
    Severity.HIGH: 7,
    Severity.MEDIUM: 4,
    Severity.LOW: 2,
    Severity.INFO: 0,
}

# 높은 기준부터 검사해 처음으로 도달한 등급을 사용한다.
RISK_THRESHOLDS: Tuple[Tuple[int, RiskLevel], ...] = (
    (20, RiskLevel.HIGH),
    (10, RiskLevel.MEDIUM),
    (5, RiskLevel.LOW),
    (0, RiskLevel.MINIMAL),
)


def weight_of(severity: Severity) -> int:
    return SEVERITY_WEIGHTS[Severity(severity)]


@dataclass(frozen=True)
class BestPracticeRule:
    name: str
    description: str
    pattern: str
    scope: Scope = Scope.RAW

    def evaluate(self, view: SourceView) -> PracticeCheck:
        found = compile_pattern(self.pattern).search(view.text(self.scope)) is not None
        return PracticeCheck(name=self.name, passed=found, description=self.description)


@dataclass(frozen=True)
class GasHintRule:
    hint_type: str
    suggestion: str
    impact: str
    pattern: str
    scope: Scope = Scope.CODE

    def evaluate(self, view: SourceView) -> Optional[GasHint]:
        if compile_pattern(self.pattern).search(view.text(self.scope)) is None:
            return None
        return GasHint(hint_type=self.hint_type, suggestion=self.suggestion, impact=self.impact)


def _build_detector(entry: Dict[str, Any]) -> Detector:
    # kind별로 탐지기를 구성한다. 패턴 목록은 불변 튜플로 고정한다.
    kind = RuleKind(entry["kind"])
    scope = Scope(entry["scope"])
    ignore_case = bool(entry["ignore_case"])
    patterns = tuple(entry["patterns"])

    if kind == RuleKind.PRESENCE:
        return PresenceDetector(
            triggers=patterns,
            requires=tuple(entry["requires"]),
            unless=tuple(entry["unless"]),
            scope=scope,
            ignore_case=ignore_case,
        )
    if kind == RuleKind.ABSENCE:
        return AbsenceDetector(
            patterns=patterns,
            when=tuple(entry["when"]),
            scope=scope,
            ignore_case=ignore_case,
        )
    if kind == RuleKind.COUNT:
        return CountDetector(
            patterns=patterns,
            min_count=int(entry["min_count"]),
            scope=scope,
            ignore_case=ignore_case,
        )
    return CustomDetector(check=str(entry["check"]))


def _build_rule(entry: Dict[str, Any]) -> Rule:
    return Rule(
        rule_id=str(entry["id"]),
        title=str(entry["title"]),
        category=Category(entry["category"]),
        severity=Severity(entry["severity"]),
        detector=_build_detector(entry),
        description=str(entry["description"]).strip(),
        recommendation=str(entry["recommendation"]).strip(),
        tags=tuple(normalize_tag(tag) for tag in entry["tags"] if normalize_tag(tag)),
    )


class RuleCatalog:
    """버전이 고정된 룰 목록과 점수 외 점검 항목(모범 사례, 가스 힌트)을 보관한다."""

    def __init__(
        self,
        rules: Iterable[Rule],
        version: str = "custom",
        best_practices: Iterable[BestPracticeRule] = (),
        gas_hints: Iterable[GasHintRule] = (),
    ) -> None:
        self._rules: Tuple[Rule, ...] = tuple(rules)
        self.version = version
        self.best_practices: Tuple[BestPracticeRule, ...] = tuple(best_practices)
        self.gas_hints: Tuple[GasHintRule, ...] = tuple(gas_hints)

        seen = set()
        for rule in self._rules:
            if rule.rule_id in seen:
                raise RuleCatalogError(f"Duplicate rule id: {rule.rule_id}")
            seen.add(rule.rule_id)

    @classmethod
    def from_file(cls, path: Path) -> "RuleCatalog":
        # rules.yml을 읽어 각 항목을 검증하고 Rule로 변환한다.
        catalog_path = Path(path)
        if not catalog_path.exists():
            raise RuleCatalogError(f"Rule catalog not found: {catalog_path}")

        try:
            data = yaml.safe_load(catalog_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise RuleCatalogError(f"Invalid YAML in {catalog_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise RuleCatalogError(f"Rule catalog must be a mapping: {catalog_path}")

        raw_rules = data.get("rules")
        if not isinstance(raw_rules, list) or not raw_rules:
            raise RuleCatalogError(f"Rule catalog must include non-empty 'rules' list: {catalog_path}")

        rules: List[Rule] = [_build_rule(validate_rule_entry(item)) for item in raw_rules]

        practices = []
        for item in data.get("best_practices") or []:
            entry = validate_best_practice(item)
            practices.append(
                BestPracticeRule(
                    name=entry["name"],
                    description=entry["description"],
                    pattern=entry["pattern"],
                    scope=Scope(entry["scope"]),
                )
            )

        hints = []
        for item in data.get("gas_hints") or []:
            entry = validate_gas_hint(item)
            hints.append(
                GasHintRule(
                    hint_type=entry["type"],
                    suggestion=entry["suggestion"],
                    impact=entry["impact"],
                    pattern=entry["pattern"],
                    scope=Scope(entry["scope"]),
                )
            )

        catalog = cls(
            rules,
            version=str(data.get("version", "unversioned")),
            best_practices=practices,
            gas_hints=hints,
        )
        logger.info("Loaded %d rules (version %s) from %s", len(rules), catalog.version, catalog_path)
        return catalog

    @classmethod
    def from_default(cls) -> "RuleCatalog":
        return default_catalog()

    def get_rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def weight_of(self, severity: Severity) -> int:
        return weight_of(severity)

    def __len__(self) -> int:
        return len(self._rules)


@lru_cache(maxsize=1)
def default_catalog() -> RuleCatalog:
    # 기본 카탈로그는 프로세스당 한 번만 로드해 공유한다(읽기 전용).
    return RuleCatalog.from_file(DEFAULT_RULES_FILE)
