"""이 파일은 .py 룰 카탈로그 스키마 검증 모듈입니다."""

from __future__ import annotations

import copy
import re
from typing import Any, Dict, List, Optional

from .detectors import CHECKS
from .errors import RuleCatalogError
from .types import Category, RuleKind, Scope, Severity


_TYPE_MAP = {
    # JSON 스키마 타입을 파이썬 타입으로 매핑한다.
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "object": dict,
    "array": list,
}

RULE_SCHEMA: Dict[str, Any] = {
    "properties": {
        "id": {"type": "string", "pattern": r"^[a-z0-9][a-z0-9-]*$"},
        "title": {"type": "string", "min_length": 1},
        "category": {"type": "string", "enum": [item.value for item in Category]},
        "severity": {"type": "string", "enum": [item.value for item in Severity]},
        "kind": {"type": "string", "enum": [item.value for item in RuleKind]},
        "description": {"type": "string", "min_length": 1},
        "recommendation": {"type": "string", "min_length": 1},
        "patterns": {"type": "array", "default": []},
        "requires": {"type": "array", "default": []},
        "unless": {"type": "array", "default": []},
        "when": {"type": "array", "default": []},
        "scope": {"type": "string", "enum": [item.value for item in Scope], "default": "code"},
        "ignore_case": {"type": "boolean", "default": False},
        "min_count": {"type": "integer", "min": 1, "default": 1},
        "check": {"type": "string"},
        "tags": {"type": "array", "default": []},
    },
    "required": ["id", "title", "category", "severity", "kind", "description", "recommendation"],
}

BEST_PRACTICE_SCHEMA: Dict[str, Any] = {
    "properties": {
        "name": {"type": "string", "min_length": 1},
        "description": {"type": "string", "min_length": 1},
        "pattern": {"type": "string", "min_length": 1},
        "scope": {"type": "string", "enum": [item.value for item in Scope], "default": "raw"},
    },
    "required": ["name", "description", "pattern"],
}

GAS_HINT_SCHEMA: Dict[str, Any] = {
    "properties": {
        "type": {"type": "string", "min_length": 1},
        "suggestion": {"type": "string", "min_length": 1},
        "impact": {"type": "string", "enum": ["LOW", "MEDIUM", "HIGH"]},
        "pattern": {"type": "string", "min_length": 1},
        "scope": {"type": "string", "enum": [item.value for item in Scope], "default": "code"},
    },
    "required": ["type", "suggestion", "impact", "pattern"],
}


# 값의 파이썬 타입별로 검사할 하한/상한 키이다. 문자열은 길이를 비교한다.
_BOUND_KEYS = {
    str: ("min_length", "max_length"),
    int: ("min", "max"),
    float: ("min", "max"),
}


def _type_error(key: str, value: Any, expected: str) -> Optional[str]:
    expected_type = _TYPE_MAP.get(expected)
    if expected_type is None:
        return f"Unsupported type in schema: {expected}"
    # bool은 int의 하위 타입이라 숫자 필드에서 따로 거른다.
    if isinstance(value, bool) and expected in ("integer", "number"):
        return f"Field '{key}' must be {expected}"
    if not isinstance(value, expected_type):
        return f"Field '{key}' must be {expected}"
    return None


def _field_errors(key: str, value: Any, spec: Dict[str, Any]) -> List[str]:
    if spec.get("type"):
        problem = _type_error(key, value, spec["type"])
        if problem:
            return [problem]

    errors: List[str] = []
    if "enum" in spec and value not in spec["enum"]:
        errors.append(f"Field '{key}' must be one of {spec['enum']}")

    bounds = _BOUND_KEYS.get(type(value))
    if bounds:
        measured = len(value) if isinstance(value, str) else value
        low_key, high_key = bounds
        if low_key in spec and measured < spec[low_key]:
            errors.append(f"Field '{key}' is below {low_key} {spec[low_key]}")
        if high_key in spec and measured > spec[high_key]:
            errors.append(f"Field '{key}' is above {high_key} {spec[high_key]}")

    if isinstance(value, str) and "pattern" in spec and not re.search(spec["pattern"], value):
        errors.append(f"Field '{key}' does not match {spec['pattern']}")
    return errors


def apply_schema(schema: Optional[Dict[str, Any]], entry: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """카탈로그 항목 하나에 기본값을 채우고 스키마 위반을 모아 한 번에 보고한다."""
    if not schema:
        return dict(entry or {})
    if entry is None:
        entry = {}
    if not isinstance(entry, dict):
        raise RuleCatalogError("Catalog entry must be a mapping")

    props = schema.get("properties", {})
    # 기본값은 항목마다 새로 복사해 목록 기본값이 공유되지 않게 한다.
    result = {key: copy.deepcopy(spec["default"]) for key, spec in props.items() if "default" in spec}
    result.update(entry)

    errors = [f"Missing required field: {key}" for key in schema.get("required", []) if key not in result]
    for key, value in result.items():
        if key in props:
            errors.extend(_field_errors(key, value, props[key]))

    if errors:
        raise RuleCatalogError("; ".join(errors))
    return result


def _check_regexes(label: str, patterns: List[Any], errors: List[str]) -> None:
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern:
            errors.append(f"{label} must contain non-empty strings")
            continue
        try:
            re.compile(pattern)
        except re.error as exc:
            errors.append(f"{label} pattern {pattern!r} is invalid: {exc}")


def validate_rule_entry(entry: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    # 공통 스키마 검증 후 kind별 필수 항목과 정규식 컴파일 여부를 확인한다.
    result = apply_schema(RULE_SCHEMA, entry)
    rule_id = result["id"]
    kind = result["kind"]
    errors: List[str] = []

    if kind == RuleKind.CUSTOM.value:
        check = result.get("check")
        if not check:
            errors.append(f"Rule {rule_id}: custom rule requires 'check'")
        elif check not in CHECKS:
            errors.append(f"Rule {rule_id}: unknown check '{check}'")
    elif not result["patterns"]:
        errors.append(f"Rule {rule_id}: '{kind}' rule requires non-empty 'patterns'")

    for key in ("patterns", "requires", "unless", "when"):
        _check_regexes(f"Rule {rule_id} {key}", result[key], errors)

    if errors:
        raise RuleCatalogError("; ".join(errors))
    return result


def validate_best_practice(entry: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    result = apply_schema(BEST_PRACTICE_SCHEMA, entry)
    errors: List[str] = []
    _check_regexes(f"Best practice {result['name']}", [result["pattern"]], errors)
    if errors:
        raise RuleCatalogError("; ".join(errors))
    return result


def validate_gas_hint(entry: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    result = apply_schema(GAS_HINT_SCHEMA, entry)
    errors: List[str] = []
    _check_regexes(f"Gas hint {result['type']}", [result["pattern"]], errors)
    if errors:
        raise RuleCatalogError("; ".join(errors))
    return result
