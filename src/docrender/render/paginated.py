"""
Paginated-print (PDF) 렌더러: reportlab 기반.

처리 순서:
1. header → 큰 가운데 정렬 제목 블록
2. section 순서대로 dispatch (heading / paragraph / list / table)
3. 전체 페이지 확정 후 각 페이지에 "Page i of N" footer (NumberedCanvas.save)

출력은 invariant 모드 → 동일 입력은 동일 바이트.
"""

import io
import logging
from collections.abc import Mapping
from typing import Any

from docrender.core.config import RenderConfig
from docrender.core.paths import format_value, interpolate, resolve_sequence
from docrender.domain.constants import FORMAT_PAGINATED
from docrender.domain.structure import (
    Alignment,
    DocumentStructure,
    Heading,
    ListSection,
    Paragraph,
    Section,
    Table,
    UnknownSection,
    lookup_cell,
    table_columns,
)
from docrender.render.base import Renderer, list_item_text
from docrender.render.layout import NumberedCanvas, PageLayout

logger = logging.getLogger(__name__)


class PaginatedRenderer(Renderer):
    """
    PDF 렌더러.

    Usage:
        renderer = PaginatedRenderer()
        pdf_bytes = renderer.render(template, data)
    """

    format_name = FORMAT_PAGINATED

    def __init__(self, config: RenderConfig | None = None):
        config = config or RenderConfig()
        self.page = config.page
        self.settings = config.paginated

    def file_extension(self) -> str:
        return "pdf"

    def build(self, structure: DocumentStructure, data: Mapping[str, Any]) -> bytes:
        buffer = io.BytesIO()
        c = NumberedCanvas(
            buffer,
            pagesize=self.page.dimensions,
            invariant=1,
            footer_font=self.settings.font,
            footer_size=self.settings.footer_font_size,
            footer_y=self.page.margin - self.settings.footer_offset,
        )
        if structure.title is not None:
            c.setTitle(structure.title)

        layout = PageLayout(c, self.page, self.settings)

        if structure.header is not None:
            layout.draw_text(
                interpolate(structure.header, data),
                self.settings.bold_font,
                self.settings.title_size,
                align=Alignment.CENTER,
            )
            layout.cursor.advance(self.settings.section_spacing * 1.5)

        for index, section in enumerate(structure.sections):
            drew = self._render_section(layout, section, data)
            if drew and index < len(structure.sections) - 1:
                layout.cursor.advance(self.settings.section_spacing)

        total = layout.finish()
        logger.debug(f"Paginated render finished: {total} page(s)")
        return buffer.getvalue()

    def _render_section(
        self,
        layout: PageLayout,
        section: Section,
        data: Mapping[str, Any],
    ) -> bool:
        """Section 1개 그리기. 아무것도 그리지 않았으면 False."""
        if isinstance(section, Heading):
            self._render_heading(layout, section, data)
            return True
        if isinstance(section, Paragraph):
            self._render_paragraph(layout, section, data)
            return True
        if isinstance(section, ListSection):
            return self._render_list(layout, section, data)
        if isinstance(section, Table):
            return self._render_table(layout, section, data)
        if isinstance(section, UnknownSection):
            self.warn_unknown_section(section)
        return False

    def _render_heading(self, layout: PageLayout, section: Heading, data: Mapping[str, Any]) -> None:
        s = self.settings
        layout.draw_text(interpolate(section.content, data), s.bold_font, s.heading_size)
        layout.cursor.advance(s.section_spacing / 2)

    def _render_paragraph(self, layout: PageLayout, section: Paragraph, data: Mapping[str, Any]) -> None:
        s = self.settings
        layout.draw_text(
            interpolate(section.content, data),
            s.font,
            s.body_size,
            align=section.align or Alignment.LEFT,
            line_gap=s.line_gap,
        )
        layout.cursor.advance(s.section_spacing / 2)

    def _render_list(self, layout: PageLayout, section: ListSection, data: Mapping[str, Any]) -> bool:
        items = resolve_sequence(section.data_key, data)
        if not items:
            logger.debug(f"List '{section.data_key}' resolved to no items")
            return False

        s = self.settings
        for index, item in enumerate(items, start=1):
            marker = f"{index}." if section.ordered else "•"
            layout.draw_text(
                f"{marker} {list_item_text(section, item)}",
                s.font,
                s.body_size,
                indent=s.list_indent,
                line_gap=s.list_line_gap,
            )

        layout.cursor.advance(s.section_spacing / 2)
        return True

    def _render_table(self, layout: PageLayout, section: Table, data: Mapping[str, Any]) -> bool:
        rows = resolve_sequence(section.data_key, data)
        columns = table_columns(section, rows)
        if not rows or not columns:
            logger.debug(f"Table '{section.data_key}' resolved to no rows; skipped")
            return False

        values = [[format_value(lookup_cell(row, col)) for col in columns] for row in rows]
        layout.draw_table(columns, values, title=section.title)
        layout.cursor.advance(self.settings.section_spacing)
        return True
