"""
Error definitions for the view engine.

규칙:
- 조용한 실패 금지 → 모든 실패는 ViewEngineError 하위 타입으로 호출자에게 전달
- 예외: partials/ 디렉터리 부재는 에러가 아니라 "빈 집합"
- 자동 재시도 없음 (재시도 정책은 호출자 몫)
"""

from typing import Any


class ViewEngineError(Exception):
    """
    뷰 엔진 에러의 공통 베이스.

    Usage:
        raise ViewEngineError("DIRECTORY_NOT_FOUND", path="templates/views/app")
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Composition (validate) ===
    DIRECTORY_NOT_FOUND = "DIRECTORY_NOT_FOUND"
    TEMPLATE_PARSE_ERROR = "TEMPLATE_PARSE_ERROR"
    VIEW_KEY_CONFLICT = "VIEW_KEY_CONFLICT"

    # === Render ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    RENDER_FAILED = "RENDER_FAILED"

    # === Form ===
    BODY_PARSE_ERROR = "BODY_PARSE_ERROR"

    # === Config ===
    INVALID_CONFIG = "INVALID_CONFIG"


# =============================================================================
# Composition Errors
# =============================================================================

class DirectoryNotFoundError(ViewEngineError):
    """필수 디렉터리(템플릿 루트, 레이아웃별 views/ 하위 폴더) 없음."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(ErrorCodes.DIRECTORY_NOT_FOUND, path=path)


class TemplateParseError(ViewEngineError):
    """
    composition set 컴파일 실패.

    파일 하나라도 깨져 있으면 전체 validate가 실패하고,
    이전에 게시된 레지스트리는 그대로 유지된다.
    """

    def __init__(self, view_key: str, cause: BaseException) -> None:
        self.view_key = view_key
        self.cause = cause
        context: dict[str, Any] = {"view_key": view_key, "error": str(cause)}
        filename = getattr(cause, "filename", None)
        if filename:
            context["file"] = filename
        lineno = getattr(cause, "lineno", None)
        if lineno:
            context["line"] = lineno
        super().__init__(ErrorCodes.TEMPLATE_PARSE_ERROR, **context)


class ViewKeyConflictError(ViewEngineError):
    """서로 다른 composition set이 같은 view key를 만들었음."""

    def __init__(self, view_key: str, paths: list[str]) -> None:
        self.view_key = view_key
        self.paths = paths
        super().__init__(ErrorCodes.VIEW_KEY_CONFLICT, view_key=view_key, paths=paths)


# =============================================================================
# Render Errors
# =============================================================================

class TemplateNotFoundError(ViewEngineError):
    """
    요청한 view key가 현재 레지스트리에 없음.

    validate 미호출, 오타, 이전 validate 실패를 구분하지 않는다.
    """

    def __init__(self, view_key: str) -> None:
        self.view_key = view_key
        super().__init__(ErrorCodes.TEMPLATE_NOT_FOUND, view_key=view_key)


class RenderExecutionError(ViewEngineError):
    """유효한 유닛을 실행하는 도중 실패 (누락 필드, include 실패 등)."""

    def __init__(self, view_key: str, cause: BaseException) -> None:
        self.view_key = view_key
        self.cause = cause
        super().__init__(ErrorCodes.RENDER_FAILED, view_key=view_key, error=str(cause))


# =============================================================================
# Form / Config Errors
# =============================================================================

class BodyParseError(ViewEngineError):
    """요청 body를 읽거나 파싱할 수 없음."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(
            ErrorCodes.BODY_PARSE_ERROR,
            error=str(cause) or type(cause).__name__,
        )


class ConfigError(ViewEngineError):
    """알 수 없거나 잘못된 설정 값."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(ErrorCodes.INVALID_CONFIG, key=key, message=message)
