"""
Pytest fixtures for the view engine tests.

- testdata/templates: 정상 트리 (layout.html + app.html, partial 1개)
- write_tree: tmp_path에 임의 트리 생성 (에러 케이스용)
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from layoutview.config import EngineConfig
from layoutview.engine import ViewEngine

TESTDATA_ROOT = Path(__file__).parent / "testdata"

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def testdata_root() -> Path:
    """tests/testdata 경로 (템플릿 루트의 부모)."""
    return TESTDATA_ROOT


@pytest.fixture
def testdata_config() -> EngineConfig:
    """tests/testdata/templates를 쓰는 설정."""
    return EngineConfig(template_root="templates")


# =============================================================================
# Engine Fixtures
# =============================================================================

@pytest.fixture
def engine(testdata_root: Path, testdata_config: EngineConfig) -> ViewEngine:
    """validate 전 엔진."""
    return ViewEngine(testdata_root, testdata_config)


@pytest.fixture
def validated_engine(engine: ViewEngine) -> ViewEngine:
    """validate 완료된 엔진."""
    engine.validate()
    return engine


# =============================================================================
# Tree Builders
# =============================================================================

@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """
    {상대경로: 내용} → tmp_path/site 아래 파일 생성.

    빈 디렉터리는 경로 끝에 "/"를 붙여 표현 (내용 무시).
    """
    site = tmp_path / "site"

    def _write(files: dict[str, str]) -> Path:
        for rel_path, content in files.items():
            target = site / rel_path
            if rel_path.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        site.mkdir(parents=True, exist_ok=True)
        return site

    return _write


@pytest.fixture
def basic_tree() -> dict[str, str]:
    """레이아웃 2개 + partial 1개 기본 트리."""
    return {
        "templates/layout.html": '<html>{% include "partials/header.html" %}{% include view %}</html>',
        "templates/app.html": "<app>{% include view %}</app>",
        "templates/partials/header.html": "<header>Header</header>",
        "templates/views/layout/home.html": "Hello, {{ data }}!",
        "templates/views/app/dashboard.html": "Dashboard",
    }
