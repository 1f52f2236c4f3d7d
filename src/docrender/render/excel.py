"""
Excel (XLSX) 렌더러: openpyxl 기반.

단일 시트에 위에서 아래로 배치:
- header / heading / paragraph → A열 텍스트 한 셀 (header, heading 굵게)
- table → (title) + 헤더 row (굵게) + 데이터 row
- list → item당 한 row
- section 사이 빈 row 1개

표 셀 값은 원래 타입 유지 (숫자는 숫자로), Decimal → float.
"""

import io
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet

from docrender.core.paths import interpolate, resolve_sequence
from docrender.domain.constants import FORMAT_XLSX
from docrender.domain.structure import (
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

BOLD = Font(bold=True)
# Excel 시트 이름 최대 길이
SHEET_TITLE_MAX = 31


class ExcelRenderer(Renderer):
    """
    Excel 문서 렌더러.

    Usage:
        renderer = ExcelRenderer()
        xlsx_bytes = renderer.render(template, data)
    """

    format_name = FORMAT_XLSX

    def file_extension(self) -> str:
        return "xlsx"

    def build(self, structure: DocumentStructure, data: Mapping[str, Any]) -> bytes:
        wb = Workbook()
        ws = wb.active
        if structure.title:
            ws.title = _sheet_title(structure.title)

        if structure.header is not None:
            ws.append([interpolate(structure.header, data)])
            ws.cell(row=ws.max_row, column=1).font = BOLD

        for index, section in enumerate(structure.sections):
            if index > 0 or structure.header is not None:
                ws.append([])
            self._render_section(ws, section, data)

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    def _render_section(self, ws: Worksheet, section: Section, data: Mapping[str, Any]) -> None:
        if isinstance(section, Heading):
            ws.append([interpolate(section.content, data)])
            ws.cell(row=ws.max_row, column=1).font = BOLD
        elif isinstance(section, Paragraph):
            ws.append([interpolate(section.content, data)])
        elif isinstance(section, ListSection):
            items = resolve_sequence(section.data_key, data)
            for index, item in enumerate(items, start=1):
                marker = f"{index}." if section.ordered else "-"
                ws.append([f"{marker} {list_item_text(section, item)}"])
        elif isinstance(section, Table):
            self._render_table(ws, section, data)
        elif isinstance(section, UnknownSection):
            self.warn_unknown_section(section)

    def _render_table(self, ws: Worksheet, section: Table, data: Mapping[str, Any]) -> None:
        rows = resolve_sequence(section.data_key, data)
        columns = table_columns(section, rows)
        if not columns:
            return

        if section.title is not None:
            ws.append([section.title])
            ws.cell(row=ws.max_row, column=1).font = BOLD

        ws.append(columns)
        header_row = ws.max_row
        for column_index in range(1, len(columns) + 1):
            ws.cell(row=header_row, column=column_index).font = BOLD

        for row in rows:
            ws.append([self._convert_value(lookup_cell(row, col)) for col in columns])

    def _convert_value(self, value: Any) -> Any:
        """값 변환 (Decimal → float, mapping/list → 문자열)."""
        if isinstance(value, Decimal):
            # Excel은 Decimal을 직접 지원하지 않음
            return float(value)
        if isinstance(value, (Mapping, list, tuple)):
            return str(value)
        return value


def _sheet_title(title: str) -> str:
    # 시트 이름 금지 문자: \ / ? * [ ] :
    cleaned = "".join("_" if ch in '\\/?*[]:' else ch for ch in title)
    return cleaned[:SHEET_TITLE_MAX] or "Sheet"
