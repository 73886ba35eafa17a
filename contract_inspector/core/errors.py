"""이 파일은 .py 공통 예외 모듈로 오류 유형을 표준화합니다."""


class InputError(ValueError):
    """분석 대상 소스가 없거나 문자열이 아닐 때 사용합니다."""


class RuleCatalogError(ValueError):
    """룰 카탈로그(YAML) 검증 실패 시 사용합니다."""


class RuleEvaluationError(RuntimeError):
    """개별 룰 평가 중 발생한 오류를 감싸는 예외입니다."""

    def __init__(self, rule_id: str, cause: BaseException) -> None:
        super().__init__(f"Rule {rule_id} failed: {type(cause).__name__}: {cause}")
        self.rule_id = rule_id
        self.cause = cause


class AuditExecutionError(RuntimeError):
    """감사 이력 저장 중 발생한 오류를 감싸는 예외입니다."""
