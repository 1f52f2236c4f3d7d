"""
Error definitions for the rendering pipeline.

규칙:
- 치명적 오류(검증 실패, 미지원 포맷)는 RenderRejectError로 명시적 실패
- 데이터 누락은 실패가 아님 → placeholder 유지, 빈 표/목록 (의도된 관용 정책)
- I/O 오류(OSError)는 감싸지 않고 그대로 전파
"""

from typing import Any


class RenderRejectError(Exception):
    """
    렌더링 파이프라인 정책 위반 시 발생하는 에러.

    즉시 중단이 필요한 경우에만 사용:
    - 데이터 레코드 누락 (None)
    - 템플릿 필수 필드 누락
    - 등록되지 않은 포맷 요청
    - 구조(structure) / 설정 형식 오류

    Usage:
        raise RenderRejectError(
            ErrorCodes.MISSING_REQUIRED_FIELD,
            "'invoiceNumber' is required",
            field="invoiceNumber",
        )
    """

    def __init__(self, code: str, message: str | None = None, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [f"[{self.code}]"]
        if self.message:
            parts.append(self.message)
        if self.context:
            details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
            parts.append(f"({details})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용 (message 없으면 생략)."""
        data: dict[str, Any] = {"code": self.code}
        if self.message is not None:
            data["message"] = self.message
        data.update(self.context)
        return data


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Data Validation ===
    MISSING_DATA = "MISSING_DATA"  # 데이터 레코드 자체가 None
    INVALID_DATA = "INVALID_DATA"  # mapping이 아님
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_FIELD_TYPE = "INVALID_FIELD_TYPE"  # 필수 sequence 필드가 list가 아님

    # === Registry ===
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    # === Structure / Config ===
    INVALID_STRUCTURE = "INVALID_STRUCTURE"
    INVALID_CONFIG = "INVALID_CONFIG"

    # === Templates ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    INVALID_TEMPLATE_ID = "INVALID_TEMPLATE_ID"

    # === Render ===
    RENDER_FAILED = "RENDER_FAILED"
