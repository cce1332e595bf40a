"""Domain layer: errors, constants and schemas."""

from .errors import (
    BodyParseError,
    ConfigError,
    DirectoryNotFoundError,
    ErrorCodes,
    RenderExecutionError,
    TemplateNotFoundError,
    TemplateParseError,
    ViewEngineError,
    ViewKeyConflictError,
)
from .schemas import CompositionSet, PageData, TemplateFile

__all__ = [
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
    # schemas
    "TemplateFile",
    "CompositionSet",
    "PageData",
]
