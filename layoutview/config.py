"""
엔진 설정: EngineConfig + yaml 로더.

설정은 엔진 생성 전에 한 번 만들어지고 이후 변경되지 않는다.

default.yaml 예:
    engine:
      template_root: templates
      csrf_field_name: csrf
      autoescape: true
      strict_undefined: true
"""

from collections.abc import Callable
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from layoutview.domain.constants import (
    CONFIG_SECTION,
    DEFAULT_CSRF_FIELD_NAME,
    DEFAULT_TEMPLATE_ROOT,
)
from layoutview.domain.errors import ConfigError

if TYPE_CHECKING:
    from fastapi import Request

CsrfTokenGenerator = Callable[["Request"], str]


# =============================================================================
# EngineConfig
# =============================================================================

@dataclass(frozen=True)
class EngineConfig:
    """
    ViewEngine 설정.

    Attributes:
        template_root: 템플릿 루트 (슬래시 구분, 예: "testdata/templates")
        csrf_field_name: CSRF hidden 필드 이름 (읽기/출력 공통)
        csrf_token_generator: request → 토큰. None이면 빈 토큰 (기능 꺼짐)
        autoescape: Jinja2 HTML 자동 이스케이프
        strict_undefined: 정의되지 않은 값 참조 시 렌더 에러
    """
    template_root: str = DEFAULT_TEMPLATE_ROOT
    csrf_field_name: str = DEFAULT_CSRF_FIELD_NAME
    csrf_token_generator: CsrfTokenGenerator | None = None
    autoescape: bool = True
    strict_undefined: bool = True

    def __post_init__(self) -> None:
        if not self.root_segments():
            raise ConfigError("template_root", "template_root cannot be empty")
        if not self.csrf_field_name:
            raise ConfigError("csrf_field_name", "csrf_field_name cannot be empty")

    def root_segments(self) -> tuple[str, ...]:
        """"testdata/templates" → ("testdata", "templates")."""
        return tuple(
            part for part in self.template_root.split("/")
            if part and part != "."
        )

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        csrf_token_generator: CsrfTokenGenerator | None = None,
    ) -> "EngineConfig":
        """
        dict(yaml 섹션)에서 설정 생성.

        토큰 생성기는 yaml로 표현할 수 없으므로 인자로 받는다.

        Raises:
            ConfigError: INVALID_CONFIG (알 수 없는 키, 타입 불일치)
        """
        expected: dict[str, type] = {
            "template_root": str,
            "csrf_field_name": str,
            "autoescape": bool,
            "strict_undefined": bool,
        }
        known = {f.name for f in fields(cls)}

        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in expected:
                reason = (
                    "must be passed as an argument"
                    if key in known
                    else "unknown option"
                )
                raise ConfigError(key, reason)
            if not isinstance(value, expected[key]):
                raise ConfigError(
                    key,
                    f"expected {expected[key].__name__}, got {type(value).__name__}",
                )
            values[key] = value

        return cls(csrf_token_generator=csrf_token_generator, **values)


# =============================================================================
# YAML Loading
# =============================================================================

def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """설정 파일 로드 (없으면 빈 dict)."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = Path(__file__).parent.parent / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[str, Any] | None = yaml.safe_load(f)
        return data or {}


def load_engine_config(
    config_path: Path | None = None,
    csrf_token_generator: CsrfTokenGenerator | None = None,
) -> EngineConfig:
    """
    yaml 파일의 engine: 섹션으로 EngineConfig 생성.

    Args:
        config_path: 설정 파일 경로 (None이면 default.yaml)
        csrf_token_generator: CSRF 토큰 생성 함수

    Returns:
        EngineConfig (섹션이 없으면 기본값)

    Raises:
        ConfigError: INVALID_CONFIG
    """
    section = load_config(config_path).get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        raise ConfigError(CONFIG_SECTION, "section must be a mapping")
    return EngineConfig.from_dict(section, csrf_token_generator=csrf_token_generator)
