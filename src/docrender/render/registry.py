"""
Renderer registry: 포맷 ID → 렌더러 인스턴스.

- 조회는 대소문자 무시
- register()는 삽입/덮어쓰기 (오케스트레이터 수정 없이 새 포맷 추가)
- 동기화 없음: 등록은 동시 렌더 시작 전(startup)에만 할 것
"""

import logging

from docrender.core.config import RenderConfig
from docrender.domain.constants import (
    FORMAT_ALIASES,
    FORMAT_DOCX,
    FORMAT_MARKUP,
    FORMAT_PAGINATED,
    FORMAT_TABULAR,
    FORMAT_XLSX,
)
from docrender.domain.errors import ErrorCodes, RenderRejectError
from docrender.render.base import Renderer
from docrender.render.excel import ExcelRenderer
from docrender.render.markup import MarkupRenderer
from docrender.render.paginated import PaginatedRenderer
from docrender.render.tabular import TabularRenderer
from docrender.render.word import DocxRenderer

logger = logging.getLogger(__name__)


class RendererRegistry:
    """
    포맷별 렌더러 저장소.

    Usage:
        registry = default_registry()
        renderer = registry.get("pdf")
        registry.register("custom", MyRenderer())
    """

    def __init__(self, renderers: dict[str, Renderer] | None = None):
        self._renderers: dict[str, Renderer] = {}
        for format_name, renderer in (renderers or {}).items():
            self.register(format_name, renderer)

    def get(self, format_name: str) -> Renderer:
        """
        포맷 ID로 렌더러 조회.

        Raises:
            RenderRejectError: UNSUPPORTED_FORMAT
        """
        renderer = self._renderers.get(format_name.lower())
        if renderer is None:
            raise RenderRejectError(
                ErrorCodes.UNSUPPORTED_FORMAT,
                message=f"Unsupported format: {format_name}",
                format=format_name,
                supported=self.formats(),
            )
        return renderer

    def register(self, format_name: str, renderer: Renderer) -> None:
        """렌더러 등록 (기존 포맷이면 덮어쓰기)."""
        if not format_name:
            raise ValueError("format name cannot be empty")
        if not isinstance(renderer, Renderer):
            raise TypeError(f"renderer must be a Renderer, got {type(renderer).__name__}")

        key = format_name.lower()
        if key in self._renderers:
            logger.info(f"Renderer for format '{key}' replaced")
        self._renderers[key] = renderer

    def formats(self) -> list[str]:
        """등록된 포맷 ID 목록 (정렬)."""
        return sorted(self._renderers)

    def __contains__(self, format_name: object) -> bool:
        return isinstance(format_name, str) and format_name.lower() in self._renderers


def default_registry(config: RenderConfig | None = None) -> RendererRegistry:
    """
    기본 포맷 + alias 가 등록된 registry 생성.

    Args:
        config: 렌더 설정 (None이면 기본값)

    Returns:
        markup/tabular/paginated/docx/xlsx + html/csv/pdf/word/spreadsheet
    """
    config = config or RenderConfig()
    renderers: dict[str, Renderer] = {
        FORMAT_MARKUP: MarkupRenderer(config),
        FORMAT_TABULAR: TabularRenderer(config),
        FORMAT_PAGINATED: PaginatedRenderer(config),
        FORMAT_DOCX: DocxRenderer(),
        FORMAT_XLSX: ExcelRenderer(),
    }
    for alias, canonical in FORMAT_ALIASES.items():
        renderers[alias] = renderers[canonical]
    return RendererRegistry(renderers)
