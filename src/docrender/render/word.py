"""
Word (DOCX) 렌더러: python-docx 기반.

구조 → 문서:
- header → 제목(level 0), heading → level 1, table title → level 2
- paragraph → 본문 단락 (align 반영)
- table → "Table Grid" 표, 헤더 row 굵게
- list → "List Bullet" / "List Number" 스타일 단락
"""

import io
from collections.abc import Mapping
from typing import Any

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH

from docrender.core.paths import format_value, interpolate, resolve_sequence
from docrender.domain.constants import FORMAT_DOCX
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

ALIGNMENTS = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.RIGHT: WD_ALIGN_PARAGRAPH.RIGHT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
}


class DocxRenderer(Renderer):
    """
    Word 문서 렌더러.

    Usage:
        renderer = DocxRenderer()
        docx_bytes = renderer.render(template, data)
    """

    format_name = FORMAT_DOCX

    def file_extension(self) -> str:
        return "docx"

    def build(self, structure: DocumentStructure, data: Mapping[str, Any]) -> bytes:
        doc = Document()
        if structure.title is not None:
            doc.core_properties.title = structure.title

        if structure.header is not None:
            doc.add_heading(interpolate(structure.header, data), 0)

        for section in structure.sections:
            self._render_section(doc, section, data)

        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    def _render_section(self, doc: DocxDocument, section: Section, data: Mapping[str, Any]) -> None:
        if isinstance(section, Heading):
            doc.add_heading(interpolate(section.content, data), 1)
        elif isinstance(section, Paragraph):
            paragraph = doc.add_paragraph(interpolate(section.content, data))
            if section.align is not None:
                paragraph.alignment = ALIGNMENTS[section.align]
        elif isinstance(section, ListSection):
            style = "List Number" if section.ordered else "List Bullet"
            for item in resolve_sequence(section.data_key, data):
                doc.add_paragraph(list_item_text(section, item), style=style)
        elif isinstance(section, Table):
            self._render_table(doc, section, data)
        elif isinstance(section, UnknownSection):
            self.warn_unknown_section(section)

    def _render_table(self, doc: DocxDocument, section: Table, data: Mapping[str, Any]) -> None:
        rows = resolve_sequence(section.data_key, data)
        columns = table_columns(section, rows)
        if not columns:
            return

        if section.title is not None:
            doc.add_heading(section.title, 2)

        table = doc.add_table(rows=1, cols=len(columns))
        table.style = "Table Grid"

        header_cells = table.rows[0].cells
        for cell, column in zip(header_cells, columns):
            # 새 셀에는 빈 단락이 하나 있음: 여기에 굵은 run 하나만 추가
            cell.paragraphs[0].add_run(column).bold = True

        for row in rows:
            cells = table.add_row().cells
            for cell, column in zip(cells, columns):
                cell.text = format_value(lookup_cell(row, column))
