"""
test_engine.py - ViewEngine 테스트

검증:
- validate 후 모든 "<layout_base>/<view>" 렌더 가능
- validate 전 render → TemplateNotFoundError
- validate 실패 시 이전 레지스트리 유지 (부분 게시 없음)
- 재validate 시 레지스트리 통째로 교체
- 동시 render + validate 안전
"""

import io
import logging
import threading
from pathlib import Path

import pytest

from layoutview.config import EngineConfig
from layoutview.domain.errors import (
    DirectoryNotFoundError,
    TemplateNotFoundError,
    TemplateParseError,
)
from layoutview.domain.schemas import PageData
from layoutview.engine import ViewEngine
from layoutview.templates.registry import RenderRegistry


# =============================================================================
# Validate + Render (testdata)
# =============================================================================

class TestValidateAndRender:
    """testdata 트리로 validate + render."""

    def test_validate_and_render(self, validated_engine: ViewEngine):
        buf = io.StringIO()

        validated_engine.render(buf, "layout/home.html", "World")

        assert buf.getvalue() == "<html><header>Header</header>Hello, World!</html>"

    def test_render_multiple_layouts(self, validated_engine: ViewEngine):
        """app 레이아웃 결과에 layout 레이아웃 내용이 섞이지 않음."""
        buf = io.StringIO()

        validated_engine.render(buf, "app/dashboard.html", None)

        assert buf.getvalue() == "<app>Dashboard</app>"

    def test_view_keys(self, validated_engine: ViewEngine):
        """.html이 아닌 파일(notes.txt)은 키가 되지 않음."""
        assert validated_engine.view_keys() == [
            "app/dashboard.html",
            "layout/contact.html",
            "layout/home.html",
        ]

    def test_render_before_validate(self, engine: ViewEngine):
        """validate 전에는 항상 TemplateNotFoundError."""
        with pytest.raises(TemplateNotFoundError):
            engine.render(io.StringIO(), "layout/home.html", None)

    def test_render_not_found(self, validated_engine: ViewEngine):
        with pytest.raises(TemplateNotFoundError):
            validated_engine.render(io.StringIO(), "layout/nonexistent.html", None)

    def test_validate_missing_root(self, testdata_root: Path):
        engine = ViewEngine(testdata_root, EngineConfig(template_root="nonexistent"))

        with pytest.raises(DirectoryNotFoundError):
            engine.validate()

    def test_render_to_string_with_page_data(self, write_tree):
        """PageData: data.title / data.data."""
        site = write_tree({
            "templates/layout.html": "<title>{{ data.title }}</title>{% include view %}",
            "templates/views/layout/list.html": "{% for item in data.data %}[{{ item }}]{% endfor %}",
        })
        engine = ViewEngine(site)
        engine.validate()

        result = engine.render_to_string(
            "layout/list.html", PageData(title="Items", data=["a", "b"])
        )

        assert result == "<title>Items</title>[a][b]"


class TestConfig:
    """설정 적용 테스트."""

    def test_default_template_root(self, testdata_root: Path):
        engine = ViewEngine(testdata_root)

        assert engine.config.template_root == "templates"

    def test_custom_template_root(self, tmp_path: Path):
        engine = ViewEngine(tmp_path, EngineConfig(template_root="testdata/templates"))

        assert engine.config.template_root == "testdata/templates"

    def test_nested_template_root(self):
        """루트 조각이 여러 단계여도 동작."""
        engine = ViewEngine(
            Path(__file__).parent.parent,
            EngineConfig(template_root="testdata/templates"),
        )

        engine.validate()

        assert "layout/home.html" in engine.registry

    def test_string_root(self, testdata_root: Path):
        engine = ViewEngine(str(testdata_root))

        engine.validate()

        assert len(engine.registry) == 3

    def test_new_form_uses_configured_field_name(self, testdata_root: Path):
        engine = ViewEngine(testdata_root, EngineConfig(csrf_field_name="_token"))

        form = engine.new_form()

        assert form.csrf_field_name == "_token"
        assert form.csrf_token == ""


# =============================================================================
# Publish Semantics
# =============================================================================

class TestPublish:
    """레지스트리 게시/유지 테스트."""

    def test_failed_validate_keeps_previous_registry(self, write_tree, basic_tree):
        """깨진 파일 추가 → validate 실패, 이전 레지스트리 그대로."""
        site = write_tree(basic_tree)
        engine = ViewEngine(site)
        engine.validate()
        before = engine.registry

        (site / "templates/views/app/broken.html").write_text("{% for %}")

        with pytest.raises(TemplateParseError):
            engine.validate()

        assert engine.registry is before
        assert engine.render_to_string("app/dashboard.html") == "<app>Dashboard</app>"

    def test_failed_first_validate_keeps_empty_registry(self, write_tree, basic_tree):
        """첫 validate 실패 → 빈 레지스트리 유지."""
        basic_tree["templates/views/layout/home.html"] = "{{ "
        engine = ViewEngine(write_tree(basic_tree))

        with pytest.raises(TemplateParseError):
            engine.validate()

        assert len(engine.registry) == 0
        with pytest.raises(TemplateNotFoundError):
            engine.render_to_string("app/dashboard.html")

    def test_missing_views_dir_keeps_previous_registry(self, write_tree, basic_tree):
        site = write_tree(basic_tree)
        engine = ViewEngine(site)
        engine.validate()
        before = engine.registry

        (site / "templates/admin.html").write_text("{% include view %}")

        with pytest.raises(DirectoryNotFoundError):
            engine.validate()

        assert engine.registry is before

    def test_revalidate_replaces_registry(self, write_tree, basic_tree):
        """재validate: 삭제된 뷰는 사라지고 새 뷰가 생김 (병합 없음)."""
        site = write_tree(basic_tree)
        engine = ViewEngine(site)
        engine.validate()

        (site / "templates/views/app/dashboard.html").unlink()
        (site / "templates/views/app/settings.html").write_text("Settings")
        engine.validate()

        assert engine.view_keys() == ["app/settings.html", "layout/home.html"]
        with pytest.raises(TemplateNotFoundError):
            engine.render_to_string("app/dashboard.html")

    def test_engines_are_independent(self, write_tree, basic_tree, testdata_root):
        """엔진 인스턴스마다 별도 레지스트리."""
        first = ViewEngine(write_tree(basic_tree))
        second = ViewEngine(testdata_root)

        first.validate()

        assert len(first.registry) == 2
        assert second.registry is not first.registry
        assert len(second.registry) == 0

    def test_initial_registry_is_empty(self, engine: ViewEngine):
        assert isinstance(engine.registry, RenderRegistry)
        assert len(engine.registry) == 0


class TestEngineLogging:
    """로그 테스트."""

    def test_logs_publish(self, engine: ViewEngine, caplog):
        caplog.set_level(logging.INFO, logger="layoutview.engine")

        engine.validate()

        assert any("Published 3 views" in r.message for r in caplog.records)

    def test_logs_failed_validate(self, write_tree, basic_tree, caplog):
        caplog.set_level(logging.WARNING, logger="layoutview.engine")
        basic_tree["templates/views/app/dashboard.html"] = "{% endif %}"
        engine = ViewEngine(write_tree(basic_tree))

        with pytest.raises(TemplateParseError):
            engine.validate()

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "keeping previous registry" in warnings[0].message


# =============================================================================
# Concurrency
# =============================================================================

class TestConcurrency:
    """동시 render + validate."""

    def test_concurrent_render_during_revalidate(self, write_tree, basic_tree):
        """validate 반복 중에도 render는 항상 완전한 레지스트리를 본다."""
        engine = ViewEngine(write_tree(basic_tree))
        engine.validate()

        errors: list[Exception] = []
        outputs: set[str] = set()
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                try:
                    outputs.add(engine.render_to_string("layout/home.html", "World"))
                    outputs.add(engine.render_to_string("app/dashboard.html"))
                except Exception as e:  # noqa: BLE001
                    errors.append(e)

        def writer():
            for _ in range(20):
                engine.validate()
            stop.set()

        readers = [threading.Thread(target=reader) for _ in range(4)]
        writer_thread = threading.Thread(target=writer)

        for t in readers:
            t.start()
        writer_thread.start()
        writer_thread.join()
        for t in readers:
            t.join()

        assert errors == []
        assert outputs == {
            "<html><header>Header</header>Hello, World!</html>",
            "<app>Dashboard</app>",
        }

    def test_concurrent_validate_serialized(self, write_tree, basic_tree):
        """validate 동시 호출도 실패 없이 끝남."""
        engine = ViewEngine(write_tree(basic_tree))
        errors: list[Exception] = []

        def validate():
            try:
                engine.validate()
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=validate) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert engine.view_keys() == ["app/dashboard.html", "layout/home.html"]
