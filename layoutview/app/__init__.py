"""
App layer: 웹 요청 경계 (FastAPI/Starlette).

역할:
- 요청 body → Form (forms.py)
- CSRF hidden 필드 출력
- ⚠️ 라우팅/세션/전송은 호스트 앱 몫
"""

from .forms import Form, form_from_request, new_form

__all__ = [
    "Form",
    "form_from_request",
    "new_form",
]
