"""
Render layer: 게시된 유닛 실행.

역할:
- view key 조회 + 스트리밍 실행 (dispatcher.py)
"""

from .dispatcher import RenderDispatcher

__all__ = [
    "RenderDispatcher",
]
