"""
렌더 디스패처: view key → 유닛 실행 → sink.

- 키가 현재 레지스트리에 없으면 TemplateNotFoundError
  (validate 전이면 항상 이 경우)
- 실행 중 실패는 RenderExecutionError로 감싼다
- 출력은 조각 단위로 바로 sink에 기록, 버퍼링/롤백 없음
- 출력 캐시 없음: 매 호출마다 새로 실행
"""

import io
from collections.abc import Callable
from typing import Any

from layoutview.domain.errors import (
    RenderExecutionError,
    TemplateNotFoundError,
)
from layoutview.templates.registry import RenderRegistry, Sink


class RenderDispatcher:
    """
    현재 게시된 레지스트리에서 유닛을 찾아 실행.

    Usage:
        dispatcher = RenderDispatcher(lambda: registry)
        dispatcher.render(buf, "app/dashboard.html", data)
    """

    def __init__(self, registry_source: Callable[[], RenderRegistry]):
        """
        Args:
            registry_source: 호출 시점의 레지스트리를 돌려주는 함수
        """
        self._registry_source = registry_source

    def render(self, sink: Sink, view_key: str, data: Any = None) -> None:
        """
        뷰를 실행해 sink에 쓴다.

        Args:
            sink: write(str)를 가진 출력 대상
            view_key: "<layout_base>/<view.html>"
            data: 템플릿에 data로 노출될 값

        Raises:
            TemplateNotFoundError: 레지스트리에 키 없음
            RenderExecutionError: 실행 실패 (부분 출력이 남아 있을 수 있음)
        """
        # 레지스트리 참조는 한 번만 읽는다 (실행 중 교체되어도 일관)
        unit = self._registry_source().get(view_key)
        if unit is None:
            raise TemplateNotFoundError(view_key)

        # 중첩 렌더 실패(다른 키의 TemplateNotFoundError 포함)도 이 뷰의 실행 실패
        try:
            unit.execute(sink, data)
        except Exception as e:
            raise RenderExecutionError(view_key, e) from e

    def render_to_string(self, view_key: str, data: Any = None) -> str:
        """render 결과를 문자열로 반환 (간편 함수)."""
        buffer = io.StringIO()
        self.render(buffer, view_key, data)
        return buffer.getvalue()
