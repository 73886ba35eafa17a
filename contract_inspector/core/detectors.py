"""이 파일은 .py 탐지기 모듈로 룰 종류별 매칭(존재/부재/카운트/커스텀) 로직을 제공합니다."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, ClassVar, Dict, Iterable, List, Tuple

from .source import SourceView
from .types import MatchResult, Rule, RuleKind, Scope

CheckFn = Callable[[SourceView], MatchResult]


@lru_cache(maxsize=None)
def compile_pattern(pattern: str, ignore_case: bool = False) -> re.Pattern:
    # 패턴은 프로세스 전체에서 한 번만 컴파일해 재사용한다.
    return re.compile(pattern, flags=re.IGNORECASE if ignore_case else 0)


def _offsets(text: str, patterns: Iterable[str], ignore_case: bool) -> List[int]:
    offsets: List[int] = []
    for pattern in patterns:
        offsets.extend(m.start() for m in compile_pattern(pattern, ignore_case).finditer(text))
    return offsets


def _any_found(text: str, patterns: Iterable[str], ignore_case: bool) -> bool:
    return any(compile_pattern(p, ignore_case).search(text) for p in patterns)


def _lines(view: SourceView, offsets: Iterable[int]) -> Tuple[int, ...]:
    return tuple(sorted({view.line_of(offset) for offset in offsets}))


class Detector(ABC):
    kind: ClassVar[RuleKind]

    @abstractmethod
    def evaluate(self, view: SourceView) -> MatchResult:
        raise NotImplementedError


@dataclass(frozen=True)
class PresenceDetector(Detector):
    # triggers 중 하나가 있고, requires가 모두 있고, unless가 하나도 없어야 매칭된다.
    triggers: Tuple[str, ...]
    requires: Tuple[str, ...] = ()
    unless: Tuple[str, ...] = ()
    scope: Scope = Scope.CODE
    ignore_case: bool = False
    kind: ClassVar[RuleKind] = RuleKind.PRESENCE

    def evaluate(self, view: SourceView) -> MatchResult:
        text = view.text(self.scope)
        hits = _offsets(text, self.triggers, self.ignore_case)
        if not hits:
            return MatchResult.no_match()
        if not all(_any_found(text, (p,), self.ignore_case) for p in self.requires):
            return MatchResult.no_match()
        if _any_found(text, self.unless, self.ignore_case):
            return MatchResult.no_match()
        return MatchResult(matched=True, count=1, locations=_lines(view, hits))


@dataclass(frozen=True)
class AbsenceDetector(Detector):
    # when이 모두 충족된 상태에서 patterns가 하나도 없으면 매칭된다.
    patterns: Tuple[str, ...]
    when: Tuple[str, ...] = ()
    scope: Scope = Scope.CODE
    ignore_case: bool = False
    kind: ClassVar[RuleKind] = RuleKind.ABSENCE

    def evaluate(self, view: SourceView) -> MatchResult:
        text = view.text(self.scope)
        if not all(_any_found(text, (p,), self.ignore_case) for p in self.when):
            return MatchResult.no_match()
        if _any_found(text, self.patterns, self.ignore_case):
            return MatchResult.no_match()
        return MatchResult(matched=True, count=1)


@dataclass(frozen=True)
class CountDetector(Detector):
    patterns: Tuple[str, ...]
    min_count: int = 1
    scope: Scope = Scope.CODE
    ignore_case: bool = False
    kind: ClassVar[RuleKind] = RuleKind.COUNT

    def evaluate(self, view: SourceView) -> MatchResult:
        hits = _offsets(view.text(self.scope), self.patterns, self.ignore_case)
        if len(hits) < self.min_count:
            return MatchResult.no_match()
        return MatchResult(matched=True, count=len(hits), locations=_lines(view, hits))


@dataclass(frozen=True)
class CustomDetector(Detector):
    # 정규식 조합으로 표현하기 어려운 검사는 레지스트리에 등록된 함수로 수행한다.
    check: str
    kind: ClassVar[RuleKind] = RuleKind.CUSTOM

    def evaluate(self, view: SourceView) -> MatchResult:
        return CHECKS.get(self.check)(view)


class CheckRegistry:
    def __init__(self) -> None:
        self._checks: Dict[str, CheckFn] = {}

    def register(self, name: str) -> Callable[[CheckFn], CheckFn]:
        def decorator(fn: CheckFn) -> CheckFn:
            if name in self._checks:
                raise KeyError(f"Check already registered: {name}")
            self._checks[name] = fn
            return fn

        return decorator

    def get(self, name: str) -> CheckFn:
        if name not in self._checks:
            raise KeyError(f"Check not registered: {name}")
        return self._checks[name]

    def __contains__(self, name: object) -> bool:
        return name in self._checks


CHECKS = CheckRegistry()

PRAGMA_PATTERN = r"\bpragma\s+solidity\s+[\^~>=<\s]*(\d+)\.(\d+)"
SAFEMATH_PATTERN = r"\bSafeMath\b"
FUNCTION_HEADER_PATTERN = r"\bfunction\s+\w+\s*\([^)]*\)([^{;]*)"
VISIBILITY_PATTERN = r"\b(public|private|internal|external)\b"


@CHECKS.register("legacy_compiler_arithmetic")
def legacy_compiler_arithmetic(view: SourceView) -> MatchResult:
    # 0.8 미만 컴파일러는 산술 오버플로를 검사하지 않으므로 SafeMath가 필요하다.
    match = compile_pattern(PRAGMA_PATTERN).search(view.code)
    if match is None:
        return MatchResult.no_match()
    version = (int(match.group(1)), int(match.group(2)))
    if version >= (0, 8) or compile_pattern(SAFEMATH_PATTERN).search(view.code):
        return MatchResult.no_match()
    return MatchResult(matched=True, count=1, locations=(view.line_of(match.start()),))


@CHECKS.register("missing_function_visibility")
def missing_function_visibility(view: SourceView) -> MatchResult:
    # 함수 선언부(이름부터 본문/세미콜론 전까지)에 가시성 키워드가 없는 경우를 센다.
    visibility = compile_pattern(VISIBILITY_PATTERN)
    offsets = [
        m.start()
        for m in compile_pattern(FUNCTION_HEADER_PATTERN).finditer(view.code)
        if not visibility.search(m.group(1))
    ]
    if not offsets:
        return MatchResult.no_match()
    return MatchResult(matched=True, count=len(offsets), locations=_lines(view, offsets))


def match(rule: Rule, view: SourceView) -> MatchResult:
    return rule.detector.evaluate(view)
