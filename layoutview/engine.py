"""
ViewEngine: 설정 + 게시된 레지스트리 + 진입점.

수명 주기:
    engine = ViewEngine(Path("site"), EngineConfig(template_root="templates"))
    engine.validate()                       # 시작 시 1회 (또는 reload)
    engine.render(buf, "app/dashboard.html", data)   # 요청마다

동시성:
- validate는 내부 락으로 직렬화, 새 레지스트리를 완성한 뒤 참조 1회 교체
- render는 락 없이 현재 참조만 읽음 → 반쯤 만들어진 맵은 절대 보이지 않음
- validate 실패 시 이전 레지스트리 그대로 유지
"""

import logging
import threading
from typing import Any

from fastapi import Request

from layoutview.app.forms import Form, form_from_request, new_form
from layoutview.config import EngineConfig
from layoutview.domain.errors import ViewEngineError
from layoutview.render.dispatcher import RenderDispatcher
from layoutview.templates.catalog import TemplateRoot, as_traversable
from layoutview.templates.composer import ViewComposer
from layoutview.templates.registry import RenderRegistry, Sink

logger = logging.getLogger(__name__)


class ViewEngine:
    """
    레이아웃 기반 HTML 뷰 엔진.

    트리 구조:
        templates/
          layout.html          # 루트의 레이아웃 파일들
          app.html
          partials/            # 모든 뷰에 포함되는 partial (선택)
            header.html
          views/
            layout/            # "layout.html"의 뷰
              home.html
            app/               # "app.html"의 뷰
              dashboard.html
    """

    def __init__(self, root: TemplateRoot, config: EngineConfig | None = None):
        """
        Args:
            root: 파일시스템 핸들 (Path, importlib.resources.files(...), 문자열)
            config: 엔진 설정 (None이면 기본값)

        validate() 호출 전에는 모든 render가 TemplateNotFoundError.
        """
        self.root = as_traversable(root)
        self.config = config or EngineConfig()

        self._registry = RenderRegistry.empty()
        self._validate_lock = threading.Lock()
        self._dispatcher = RenderDispatcher(self._current_registry)

    def _current_registry(self) -> RenderRegistry:
        return self._registry

    @property
    def registry(self) -> RenderRegistry:
        """현재 게시된 레지스트리 (읽기 전용)."""
        return self._registry

    def view_keys(self) -> list[str]:
        return self._registry.keys()

    # =========================================================================
    # Composition
    # =========================================================================

    def validate(self) -> None:
        """
        트리 전체를 컴파일해 레지스트리를 교체.

        Raises:
            DirectoryNotFoundError: 템플릿 루트 또는 views/<layout_base>/ 없음
            TemplateParseError: 파일 컴파일 실패
            ViewKeyConflictError: view key 중복
        """
        with self._validate_lock:
            composer = ViewComposer(self.root, self.config)
            try:
                registry = composer.compose()
            except ViewEngineError as e:
                logger.warning(
                    f"Template validation failed, keeping previous registry "
                    f"({len(self._registry)} views): {e}"
                )
                raise

            self._registry = registry
            logger.info(f"Published {len(registry)} views")

    # =========================================================================
    # Render
    # =========================================================================

    def render(self, sink: Sink, view_key: str, data: Any = None) -> None:
        """
        뷰를 실행해 sink에 쓴다.

        view key 형식은 "[layout]/[page.html]", layout은 확장자를 뺀 레이아웃 파일명:

            engine.render(buf, "app/dashboard.html", data)

        Raises:
            TemplateNotFoundError: 키 없음 (validate 전 포함)
            RenderExecutionError: 실행 실패
        """
        self._dispatcher.render(sink, view_key, data)

    def render_to_string(self, view_key: str, data: Any = None) -> str:
        return self._dispatcher.render_to_string(view_key, data)

    # =========================================================================
    # Forms
    # =========================================================================

    def new_form(self) -> Form:
        """설정된 CSRF 필드 이름을 쓰는 빈 Form (토큰 없음)."""
        return new_form(self.config.csrf_field_name)

    async def form_from_request(self, request: Request) -> Form:
        """
        요청 body로 Form 생성 (설정된 CSRF 필드/생성기 적용).

        Raises:
            BodyParseError: body 파싱 실패
        """
        return await form_from_request(
            request,
            csrf_field_name=self.config.csrf_field_name,
            csrf_token_generator=self.config.csrf_token_generator,
        )
