"""
layoutview: 레이아웃 기반 HTML 뷰 컴포지션/렌더링 엔진 (Jinja2).

    engine = ViewEngine(Path("site"))
    engine.validate()
    engine.render(buf, "layout/home.html", "World")
"""

from .config import EngineConfig, load_config, load_engine_config
from .domain import (
    BodyParseError,
    ConfigError,
    DirectoryNotFoundError,
    ErrorCodes,
    PageData,
    RenderExecutionError,
    TemplateNotFoundError,
    TemplateParseError,
    ViewEngineError,
    ViewKeyConflictError,
)
from .app import Form, form_from_request, new_form
from .engine import ViewEngine

__all__ = [
    # engine
    "ViewEngine",
    # config
    "EngineConfig",
    "load_config",
    "load_engine_config",
    # forms
    "Form",
    "form_from_request",
    "new_form",
    "PageData",
    # errors
    "ViewEngineError",
    "ErrorCodes",
    "DirectoryNotFoundError",
    "TemplateParseError",
    "ViewKeyConflictError",
    "TemplateNotFoundError",
    "RenderExecutionError",
    "BodyParseError",
    "ConfigError",
]
