"""
Templates layer: 템플릿 트리 탐색 및 컴포지션.

역할:
- 디렉터리별 .html 목록 (catalog.py)
- (layout, view, partials) 묶음 컴파일 (composer.py)
- 게시용 불변 레지스트리 (registry.py)
"""

from .catalog import list_optional_templates, list_templates
from .composer import CompositionLoader, ViewComposer
from .registry import ExecutableUnit, RenderRegistry

__all__ = [
    # catalog
    "list_templates",
    "list_optional_templates",
    # composer
    "ViewComposer",
    "CompositionLoader",
    # registry
    "RenderRegistry",
    "ExecutableUnit",
]
