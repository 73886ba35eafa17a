"""이 파일은 .py 테스트 모듈로 룰 카탈로그 스키마 검증을 확인합니다."""

from contract_inspector.core.config_validation import (
    apply_schema,
    validate_best_practice,
    validate_gas_hint,
    validate_rule_entry,
)
from contract_inspector.core.errors import RuleCatalogError


def _rule(**overrides):
    entry = {
        "id": "sample-rule",
        "title": "Sample",
        "category": "code-quality",
        "severity": "low",
        "kind": "presence",
        "patterns": [r"\bfoo\b"],
        "description": "Sample description",
        "recommendation": "Sample recommendation",
    }
    entry.update(overrides)
    return entry


def test_apply_schema_defaults() -> None:
    schema = {
        "properties": {
            "scope": {"type": "string", "default": "code"},
        }
    }
    result = apply_schema(schema, {})
    assert result["scope"] == "code"


def test_apply_schema_type_error() -> None:
    schema = {"properties": {"min_count": {"type": "integer"}}}
    try:
        apply_schema(schema, {"min_count": "not-int"})
    except RuleCatalogError as exc:
        assert "min_count" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")


def test_apply_schema_rejects_bool_as_integer() -> None:
    schema = {"properties": {"min_count": {"type": "integer"}}}
    try:
        apply_schema(schema, {"min_count": True})
    except RuleCatalogError as exc:
        assert "min_count" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")


def test_rule_entry_fills_defaults() -> None:
    result = validate_rule_entry(_rule())
    assert result["scope"] == "code"
    assert result["ignore_case"] is False
    assert result["min_count"] == 1
    assert result["unless"] == []


def test_rule_entry_min_count_validation() -> None:
    try:
        validate_rule_entry(_rule(kind="count", min_count=0))
    except RuleCatalogError as exc:
        assert "min_count" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")


def test_rule_entry_unknown_severity() -> None:
    try:
        validate_rule_entry(_rule(severity="severe"))
    except RuleCatalogError as exc:
        assert "severity" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")


def test_rule_entry_missing_required_field() -> None:
    entry = _rule()
    del entry["recommendation"]
    try:
        validate_rule_entry(entry)
    except RuleCatalogError as exc:
        assert "recommendation" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")


def test_rule_entry_invalid_regex() -> None:
    try:
        validate_rule_entry(_rule(unless=["(unclosed"]))
    except RuleCatalogError as exc:
        assert "sample-rule" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")


def test_rule_entry_requires_patterns_for_regex_kinds() -> None:
    try:
        validate_rule_entry(_rule(patterns=[]))
    except RuleCatalogError as exc:
        assert "patterns" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")


def test_custom_rule_requires_registered_check() -> None:
    try:
        validate_rule_entry(_rule(kind="custom", patterns=[], check="no_such_check"))
    except RuleCatalogError as exc:
        assert "no_such_check" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")

    result = validate_rule_entry(_rule(kind="custom", patterns=[], check="missing_function_visibility"))
    assert result["check"] == "missing_function_visibility"


def test_best_practice_and_gas_hint_entries() -> None:
    practice = validate_best_practice({"name": "Events", "description": "d", "pattern": r"\bevent\b"})
    assert practice["scope"] == "raw"

    hint = validate_gas_hint({"type": "Storage", "suggestion": "s", "impact": "MEDIUM", "pattern": "string"})
    assert hint["scope"] == "code"

    try:
        validate_gas_hint({"type": "Storage", "suggestion": "s", "impact": "HUGE", "pattern": "string"})
    except RuleCatalogError as exc:
        assert "impact" in str(exc)
    else:
        raise AssertionError("RuleCatalogError not raised")


def test_list_defaults_are_not_shared() -> None:
    first = validate_rule_entry(_rule())
    first["unless"].append(r"\bbar\b")
    assert validate_rule_entry(_rule())["unless"] == []
