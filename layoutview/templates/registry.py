"""
렌더 레지스트리: view key → ExecutableUnit.

- 게시 후 불변 (MappingProxyType)
- validate 성공 시 통째로 교체, 병합 없음
- 읽기 전용 조회만 제공 → 락 없이 동시 렌더 가능
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Protocol

from jinja2 import Environment, Template

from layoutview.domain.constants import (
    CONTEXT_DATA,
    CONTEXT_LAYOUT,
    CONTEXT_VIEW,
    CONTEXT_VIEW_KEY,
)
from layoutview.domain.schemas import CompositionSet


class Sink(Protocol):
    """렌더 출력 대상 (io.StringIO, 텍스트 파일 등)."""

    def write(self, s: str, /) -> Any: ...


# =============================================================================
# ExecutableUnit
# =============================================================================

@dataclass(frozen=True)
class ExecutableUnit:
    """
    composition set 1개를 컴파일한 결과.

    environment는 이 set의 파일만 알고 있다 (다른 레이아웃/뷰 참조 불가).
    진입점은 레이아웃 템플릿.
    """
    composition: CompositionSet
    environment: Environment
    template: Template

    @property
    def view_key(self) -> str:
        return self.composition.view_key

    def context(self, data: Any) -> dict[str, Any]:
        return {
            CONTEXT_DATA: data,
            CONTEXT_VIEW: self.composition.view_template_name,
            CONTEXT_LAYOUT: self.composition.layout_template_name,
            CONTEXT_VIEW_KEY: self.composition.view_key,
        }

    def execute(self, sink: Sink, data: Any) -> None:
        """생성되는 조각을 바로 sink에 쓴다. 실패 시 이미 쓴 출력은 남는다."""
        for chunk in self.template.generate(self.context(data)):
            sink.write(chunk)


# =============================================================================
# RenderRegistry
# =============================================================================

class RenderRegistry:
    """
    게시된 유닛 맵.

    Usage:
        unit = registry.get("app/dashboard.html")
        if unit is None:
            ...
    """

    __slots__ = ("_units",)

    def __init__(self, units: Mapping[str, ExecutableUnit] | None = None):
        self._units: Mapping[str, ExecutableUnit] = MappingProxyType(dict(units or {}))

    @classmethod
    def empty(cls) -> "RenderRegistry":
        return cls()

    def get(self, key: str) -> ExecutableUnit | None:
        return self._units.get(key)

    def keys(self) -> list[str]:
        return sorted(self._units)

    def __contains__(self, key: object) -> bool:
        return key in self._units

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"RenderRegistry({len(self._units)} views)"
