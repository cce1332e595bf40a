"""
템플릿 카탈로그: 디렉터리 1개의 .html 파일 목록.

규칙:
- 비재귀: 하위 디렉터리는 건너뜀
- 이름이 ".html"로 끝나지 않는 항목은 제외 (에러 아님)
- 이름순 정렬 → 호출마다 같은 순서
- 필수 디렉터리 없음 → DirectoryNotFoundError
- 선택 디렉터리 없음 → 빈 목록 (list_optional_templates)

root는 Traversable이면 무엇이든 된다:
- 디스크: Path("site")
- 패키지 내장: importlib.resources.files("mypkg")
"""

import logging
from importlib.resources.abc import Traversable
from pathlib import Path

from layoutview.domain.constants import TEMPLATE_SUFFIX
from layoutview.domain.errors import DirectoryNotFoundError
from layoutview.domain.schemas import TemplateFile

logger = logging.getLogger(__name__)

TemplateRoot = Traversable | Path | str


def as_traversable(root: TemplateRoot) -> Traversable:
    """문자열 경로는 Path로 변환."""
    if isinstance(root, str):
        return Path(root)
    return root


def join_segments(*segments: str) -> str:
    """("templates", "views", "app") → "templates/views/app"."""
    parts: list[str] = []
    for segment in segments:
        parts.extend(p for p in segment.split("/") if p and p != ".")
    return "/".join(parts)


def _resolve(root: Traversable, address: str) -> Traversable:
    target = root
    for part in address.split("/"):
        if part:
            target = target.joinpath(part)
    return target


def list_templates(root: TemplateRoot, *segments: str) -> list[TemplateFile]:
    """
    디렉터리의 .html 파일 목록 (필수 디렉터리).

    Args:
        root: 파일시스템 핸들
        segments: 디렉터리 경로 조각 (예: "templates", "views", "app")

    Returns:
        TemplateFile 목록 (이름순)

    Raises:
        DirectoryNotFoundError: 경로가 없거나 디렉터리가 아님
    """
    root = as_traversable(root)
    address = join_segments(*segments)
    directory = _resolve(root, address)

    if not directory.is_dir():
        raise DirectoryNotFoundError(address)

    files = []
    for entry in directory.iterdir():
        if entry.is_dir() or not entry.name.endswith(TEMPLATE_SUFFIX):
            continue
        path = f"{address}/{entry.name}" if address else entry.name
        files.append(TemplateFile(name=entry.name, path=path, resource=entry))

    files.sort(key=lambda f: f.name)
    logger.debug(f"Listed {len(files)} templates in {address or '.'}")
    return files


def list_optional_templates(root: TemplateRoot, *segments: str) -> list[TemplateFile]:
    """
    선택 디렉터리용: 디렉터리가 없으면 빈 목록.

    그 외 에러는 그대로 전파.
    """
    try:
        return list_templates(root, *segments)
    except DirectoryNotFoundError as e:
        logger.debug(f"Optional directory not found: {e.path}")
        return []
