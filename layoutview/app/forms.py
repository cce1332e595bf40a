"""
Form: 제출된 필드 값 + 검증 에러 (요청 1건 단위).

핸들러가 요청을 파싱한 뒤 에러를 채우고, 템플릿이 다시 읽어
인라인 메시지 표시/입력값 재채움에 사용한다.

    form = await engine.form_from_request(request)

    if form.get("email") == "":
        form.add_field_error("email", "Email is required")

    if not form.is_valid():
        engine.render(buf, "layout/contact.html", {"form": form})

규칙:
- body 필드만 읽는다 (query string은 절대 섞지 않음)
- 같은 필드가 여러 번 오면 첫 값
- 필드 에러는 필드당 첫 메시지만 유지
"""

import logging
from dataclasses import dataclass, field

from fastapi import Request
from markupsafe import Markup
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect

from layoutview.config import CsrfTokenGenerator
from layoutview.domain.constants import DEFAULT_CSRF_FIELD_NAME
from layoutview.domain.errors import BodyParseError

logger = logging.getLogger(__name__)

CSRF_FIELD_MARKUP = Markup('<input type="hidden" name="{}" value="{}">')


# =============================================================================
# Form
# =============================================================================

@dataclass
class Form:
    """
    제출 값과 검증 에러.

    템플릿에서:
        {{ data.form.csrf_field() }}
        <input name="email" value="{{ data.form.get('email') }}">
        {% if 'email' in data.form.field_errors %}
          <p class="error">{{ data.form.field_errors['email'] }}</p>
        {% endif %}
    """
    # 필드명 → 값
    values: dict[str, str] = field(default_factory=dict)

    # 필드명 → 첫 번째 에러 메시지
    field_errors: dict[str, str] = field(default_factory=dict)

    # 특정 필드와 무관한 에러 (예: "invalid credentials")
    errors: list[str] = field(default_factory=list)

    csrf_field_name: str = DEFAULT_CSRF_FIELD_NAME
    csrf_token: str = ""

    def set(self, name: str, value: str) -> None:
        self.values[name] = value

    def get(self, name: str) -> str:
        """값 반환, 없으면 ""."""
        return self.values.get(name, "")

    def add_field_error(self, name: str, message: str) -> None:
        """필드 에러 추가. 필드당 첫 에러만 유지."""
        self.field_errors.setdefault(name, message)

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def is_valid(self) -> bool:
        """필드 에러, 폼 에러 모두 없을 때만 True."""
        return not self.field_errors and not self.errors

    def csrf_field(self) -> Markup:
        """CSRF hidden input. 이름/토큰 모두 속성 이스케이프."""
        return CSRF_FIELD_MARKUP.format(self.csrf_field_name, self.csrf_token)


def new_form(
    csrf_field_name: str = DEFAULT_CSRF_FIELD_NAME,
    csrf_token: str = "",
) -> Form:
    """빈 Form 생성."""
    return Form(csrf_field_name=csrf_field_name, csrf_token=csrf_token)


# =============================================================================
# Request Adapter
# =============================================================================

async def form_from_request(
    request: Request,
    csrf_field_name: str = DEFAULT_CSRF_FIELD_NAME,
    csrf_token_generator: CsrfTokenGenerator | None = None,
) -> Form:
    """
    요청 body 값으로 Form 생성.

    Args:
        request: FastAPI/Starlette 요청
        csrf_field_name: CSRF 필드 이름
        csrf_token_generator: request → 토큰 (None이면 빈 토큰)

    Returns:
        값이 채워진 Form (에러 없음)

    Raises:
        BodyParseError: body를 읽을 수 없거나 형식이 깨짐
    """
    try:
        form_data = await request.form()
    except (MultiPartException, HTTPException, ClientDisconnect) as e:
        logger.warning(f"Failed to parse request body for {request.url.path}: {e!r}")
        raise BodyParseError(e) from e

    token = csrf_token_generator(request) if csrf_token_generator else ""
    form = new_form(csrf_field_name, token)

    for name, value in form_data.multi_items():
        # 업로드 파일은 값이 아님
        if not isinstance(value, str):
            continue
        if name not in form.values:
            form.values[name] = value

    return form
