"""
뷰 컴포저: 템플릿 트리 → RenderRegistry.

알고리즘:
1. partials/ 목록 (선택, 없으면 빈 집합)
2. 루트의 레이아웃 목록 (필수)
3. 레이아웃마다 views/<layout_base>/ 목록 (필수, 비어 있어도 됨)
4. (layout, view, partials) → CompositionSet → ExecutableUnit
5. 전부 성공해야 새 레지스트리 반환 (부분 게시 없음)

유닛 내부 템플릿 이름 (템플릿 루트 기준):
- 레이아웃: "app.html"
- 뷰: "views/app/dashboard.html"
- partial: "partials/header.html"

레이아웃 예:
    <html>{% include "partials/header.html" %}{% include view %}</html>
"""

import logging
from collections.abc import Mapping

from jinja2 import (
    BaseLoader,
    Environment,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    Undefined,
)

from layoutview.config import EngineConfig
from layoutview.domain.constants import PARTIALS_DIR, VIEWS_DIR
from layoutview.domain.errors import TemplateParseError, ViewKeyConflictError
from layoutview.domain.schemas import CompositionSet, TemplateFile, strip_suffix

from .catalog import (
    TemplateRoot,
    as_traversable,
    list_optional_templates,
    list_templates,
)
from .registry import ExecutableUnit, RenderRegistry

logger = logging.getLogger(__name__)


# =============================================================================
# Loader
# =============================================================================

class CompositionLoader(BaseLoader):
    """
    composition set 1개의 소스만 제공하는 Jinja2 로더.

    소스는 validate 시점에 읽어 둔 스냅샷 → 유닛은 디스크 변경에 영향받지 않음.
    """

    def __init__(self, sources: Mapping[str, tuple[str, str]]):
        # name → (source, filename)
        self._sources = dict(sources)

    def get_source(self, environment, template):
        try:
            source, filename = self._sources[template]
        except KeyError:
            raise TemplateNotFound(template) from None
        return source, filename, lambda: True

    def list_templates(self) -> list[str]:
        return sorted(self._sources)


# =============================================================================
# ViewComposer
# =============================================================================

class ViewComposer:
    """
    템플릿 트리를 읽어 레지스트리를 만든다.

    Usage:
        composer = ViewComposer(Path("site"), EngineConfig())
        registry = composer.compose()
    """

    def __init__(self, root: TemplateRoot, config: EngineConfig | None = None):
        """
        Args:
            root: 파일시스템 핸들 (Path, importlib.resources.files(...), 문자열)
            config: 엔진 설정 (None이면 기본값)
        """
        self.root = as_traversable(root)
        self.config = config or EngineConfig()

    # =========================================================================
    # Discovery
    # =========================================================================

    def composition_sets(self) -> list[CompositionSet]:
        """
        트리의 모든 CompositionSet (레이아웃 순 → 뷰 순).

        Raises:
            DirectoryNotFoundError: 템플릿 루트 또는 views/<layout_base>/ 없음
        """
        segments = self.config.root_segments()

        # partials는 선택
        partials = list_optional_templates(self.root, *segments, PARTIALS_DIR)
        if not partials:
            logger.info(f"Found 0 partials in {'/'.join(segments)}/{PARTIALS_DIR}")

        layouts = list_templates(self.root, *segments)

        sets = []
        for layout in layouts:
            layout_base = strip_suffix(layout.name)
            views = list_templates(self.root, *segments, VIEWS_DIR, layout_base)
            for view in views:
                sets.append(
                    CompositionSet(layout=layout, view=view, partials=tuple(partials))
                )
        return sets

    # =========================================================================
    # Compile
    # =========================================================================

    def compose(self) -> RenderRegistry:
        """
        전체 트리를 컴파일해 새 레지스트리 반환.

        Returns:
            RenderRegistry (호출자가 게시)

        Raises:
            DirectoryNotFoundError: 필수 디렉터리 없음
            TemplateParseError: 파일 하나라도 컴파일 실패
            ViewKeyConflictError: 같은 view key가 두 번 생성됨
        """
        sets = self.composition_sets()

        # 같은 파일은 한 번만 읽는다 (partials, 레이아웃 공유)
        source_cache: dict[str, str] = {}
        units: dict[str, ExecutableUnit] = {}

        for composition in sets:
            key = composition.view_key
            if key in units:
                raise ViewKeyConflictError(
                    key,
                    [units[key].composition.view.path, composition.view.path],
                )
            units[key] = self.compile(composition, source_cache)
            logger.debug(f"Composed {key}: {list(composition.member_paths)}")

        layout_count = len({c.layout.path for c in sets})
        partial_count = len(sets[0].partials) if sets else 0
        logger.info(
            f"Composed {len(units)} views "
            f"({layout_count} layouts with views, {partial_count} partials)"
        )
        return RenderRegistry(units)

    def compile(
        self,
        composition: CompositionSet,
        source_cache: dict[str, str] | None = None,
    ) -> ExecutableUnit:
        """
        CompositionSet 1개 → ExecutableUnit.

        진입점(레이아웃)뿐 아니라 모든 멤버를 컴파일해서
        문법 오류를 validate 시점에 잡는다.

        Raises:
            TemplateParseError: 읽기/컴파일 실패
        """
        if source_cache is None:
            source_cache = {}

        members = composition.members()
        sources: dict[str, tuple[str, str]] = {}
        try:
            for name, template_file in members:
                sources[name] = (
                    self._read(template_file, source_cache),
                    template_file.path,
                )

            environment = self._environment(sources)
            for name, _ in members:
                environment.get_template(name)
            template = environment.get_template(composition.layout_template_name)
        except (TemplateError, OSError, UnicodeDecodeError) as e:
            raise TemplateParseError(composition.view_key, e) from e

        return ExecutableUnit(
            composition=composition,
            environment=environment,
            template=template,
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _environment(self, sources: Mapping[str, tuple[str, str]]) -> Environment:
        """set 전용 Jinja2 Environment."""
        return Environment(
            loader=CompositionLoader(sources),
            autoescape=self.config.autoescape,
            undefined=StrictUndefined if self.config.strict_undefined else Undefined,
            auto_reload=False,
            cache_size=-1,  # 멤버 수만큼만 쌓이므로 무제한
        )

    @staticmethod
    def _read(template_file: TemplateFile, source_cache: dict[str, str]) -> str:
        source = source_cache.get(template_file.path)
        if source is None:
            source = template_file.read_text()
            source_cache[template_file.path] = source
        return source
