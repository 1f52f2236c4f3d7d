"""
Tabular-text (CSV) 렌더러.

출력 규칙:
- header → "# ..." 주석 한 줄
- table → "# title" + 컬럼 헤더 줄 + row당 한 줄
- paragraph/heading → 주석 한 줄, list → item당 주석 한 줄
- section 사이 빈 줄 (첫 section 앞 제외)
- delimiter/따옴표/개행 포함 값은 따옴표로 감싸고 내부 따옴표는 두 번 (csv 모듈)
"""

import csv
import io
from collections.abc import Mapping
from typing import Any

from docrender.core.config import RenderConfig, TabularSettings
from docrender.core.paths import format_value, interpolate, resolve_sequence
from docrender.domain.constants import FORMAT_TABULAR
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


class TabularRenderer(Renderer):
    """
    CSV 렌더러.

    Usage:
        renderer = TabularRenderer()
        text = renderer.render(template, data)
    """

    format_name = FORMAT_TABULAR

    def __init__(self, config: RenderConfig | None = None):
        self.settings: TabularSettings = (config or RenderConfig()).tabular

    def file_extension(self) -> str:
        return "csv"

    def build(self, structure: DocumentStructure, data: Mapping[str, Any]) -> str:
        buffer = io.StringIO()

        if structure.header is not None:
            buffer.write(self._comment(interpolate(structure.header, data)))

        # 아무것도 출력하지 않은 section은 빈 줄도 만들지 않음
        blocks = [self._render_section(section, data) for section in structure.sections]
        buffer.write("\n".join(block for block in blocks if block))

        return buffer.getvalue()

    def _render_section(self, section: Section, data: Mapping[str, Any]) -> str:
        if isinstance(section, Table):
            return self._render_table(section, data)
        if isinstance(section, (Paragraph, Heading)):
            return self._comment(interpolate(section.content, data))
        if isinstance(section, ListSection):
            return self._render_list(section, data)
        if isinstance(section, UnknownSection):
            self.warn_unknown_section(section)
        return ""

    def _render_table(self, section: Table, data: Mapping[str, Any]) -> str:
        buffer = io.StringIO()
        if section.title is not None:
            buffer.write(self._comment(section.title))

        rows = resolve_sequence(section.data_key, data)
        columns = table_columns(section, rows)
        if not columns:
            return buffer.getvalue()

        writer = csv.writer(
            buffer,
            delimiter=self.settings.delimiter,
            quotechar='"',
            quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )
        writer.writerow(columns)
        for row in rows:
            values = [format_value(lookup_cell(row, col)) for col in columns]
            if values == [""]:
                # csv.writer 는 빈 필드 하나를 '""' 로 씀 → 빈 값은 빈 줄
                buffer.write("\n")
                continue
            writer.writerow(values)

        return buffer.getvalue()

    def _render_list(self, section: ListSection, data: Mapping[str, Any]) -> str:
        lines = []
        for index, item in enumerate(resolve_sequence(section.data_key, data), start=1):
            marker = f"{index}." if section.ordered else "-"
            lines.append(self._comment(f"{marker} {list_item_text(section, item)}"))
        return "".join(lines)

    def _comment(self, text: str) -> str:
        # 주석은 항상 한 줄
        single_line = " ".join(text.splitlines())
        return f"{self.settings.comment_prefix}{single_line}\n"

