"""
Data schemas for the view engine.

- TemplateFile: 디렉터리 목록에서 발견된 .html 파일 1개
- CompositionSet: (layout, view, partials) 묶음 → 렌더 유닛 1개
- PageData: 페이지 제목 + 임의 데이터 (편의용)
"""

from dataclasses import dataclass, field
from importlib.resources.abc import Traversable
from typing import Any

from .constants import (
    PARTIALS_DIR,
    TEMPLATE_SUFFIX,
    VIEW_KEY_SEPARATOR,
    VIEWS_DIR,
)

# =============================================================================
# Catalog
# =============================================================================

@dataclass(frozen=True)
class TemplateFile:
    """
    발견된 템플릿 파일.

    name: 확장자 포함 파일명 (예: "app.html")
    path: 루트 기준 슬래시 경로 (예: "templates/app.html")
    resource: 파일 읽기용 핸들 (비교 대상 아님)
    """
    name: str
    path: str
    resource: Traversable = field(repr=False, compare=False)

    def read_text(self) -> str:
        return self.resource.read_text(encoding="utf-8")


def strip_suffix(name: str) -> str:
    """"app.html" → "app"."""
    if name.endswith(TEMPLATE_SUFFIX):
        return name[: -len(TEMPLATE_SUFFIX)]
    return name


# =============================================================================
# Composition
# =============================================================================

@dataclass(frozen=True)
class CompositionSet:
    """
    하나의 렌더 유닛으로 묶이는 파일 그룹.

    member_paths 순서는 항상 layout, view, partials (catalog 순서).
    """
    layout: TemplateFile
    view: TemplateFile
    partials: tuple[TemplateFile, ...] = ()

    @property
    def layout_name(self) -> str:
        return self.layout.name

    @property
    def layout_base(self) -> str:
        return strip_suffix(self.layout.name)

    @property
    def view_file_name(self) -> str:
        return self.view.name

    @property
    def view_key(self) -> str:
        return f"{self.layout_base}{VIEW_KEY_SEPARATOR}{self.view.name}"

    @property
    def member_paths(self) -> tuple[str, ...]:
        return (
            self.layout.path,
            self.view.path,
            *(p.path for p in self.partials),
        )

    # 유닛 내부 템플릿 이름 (템플릿 루트 기준)

    @property
    def layout_template_name(self) -> str:
        return self.layout.name

    @property
    def view_template_name(self) -> str:
        return f"{VIEWS_DIR}/{self.layout_base}/{self.view.name}"

    def members(self) -> list[tuple[str, TemplateFile]]:
        """(유닛 내부 템플릿 이름, 파일) 목록. member_paths와 같은 순서."""
        return [
            (self.layout_template_name, self.layout),
            (self.view_template_name, self.view),
            *((f"{PARTIALS_DIR}/{p.name}", p) for p in self.partials),
        ]


# =============================================================================
# Render Data
# =============================================================================

@dataclass
class PageData:
    """
    페이지 제목과 임의 데이터를 함께 넘길 때 쓰는 래퍼.

    템플릿에서: {{ data.title }}, {{ data.data }}
    """
    title: str = ""
    data: Any = None
