"""
Markup (HTML) 렌더러: Jinja2 기반.

출력:
- 고정 문서 shell (doctype, head + title + style, body)
- header → <h1>, heading → <h2>, paragraph → <p>
- table → (<h3> title) + <table> 헤더 row + 데이터 row (없는 값은 빈 칸)
- list → <ul>/<ol>

주의: 치환 값은 HTML escape 하지 않음 (autoescape=False, 기존 출력과 동일).
      신뢰할 수 없는 데이터가 들어오면 markup injection 가능.
"""

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined

from docrender.core.config import MarkupSettings, RenderConfig
from docrender.core.paths import format_value, interpolate, resolve_sequence
from docrender.domain.constants import FORMAT_MARKUP
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

DOCUMENT_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<title>{{ title }}</title>
<style>
body { font-family: Arial, sans-serif; margin: 20px; }
table { border-collapse: collapse; width: 100%; }
th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
th { background-color: #4CAF50; color: white; }
</style>
</head>
<body>
{% if header is not none %}
<h1>{{ header }}</h1>
{% endif %}
{% for block in blocks %}
{% if block.kind == "table" %}
{% if block.title is not none %}
<h3>{{ block.title }}</h3>
{% endif %}
<table>
<thead>
<tr>
{% for column in block.columns %}
<th>{{ column }}</th>
{% endfor %}
</tr>
</thead>
<tbody>
{% for row in block.rows %}
<tr>
{% for cell in row %}
<td>{{ cell }}</td>
{% endfor %}
</tr>
{% endfor %}
</tbody>
</table>
{% elif block.kind == "paragraph" %}
{% if block.align is not none %}
<p style="text-align: {{ block.align }}">{{ block.text }}</p>
{% else %}
<p>{{ block.text }}</p>
{% endif %}
{% elif block.kind == "heading" %}
<h2>{{ block.text }}</h2>
{% elif block.kind == "list" %}
<{{ block.tag }}>
{% for item in block.entries %}
<li>{{ item }}</li>
{% endfor %}
</{{ block.tag }}>
{% endif %}
{% endfor %}
</body>
</html>"""


class MarkupRenderer(Renderer):
    """
    HTML 렌더러.

    Usage:
        renderer = MarkupRenderer()
        html = renderer.render(template, data)
    """

    format_name = FORMAT_MARKUP

    def __init__(self, config: RenderConfig | None = None):
        self.settings: MarkupSettings = (config or RenderConfig()).markup
        env = Environment(
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._template = env.from_string(DOCUMENT_TEMPLATE)

    def file_extension(self) -> str:
        return "html"

    def build(self, structure: DocumentStructure, data: Mapping[str, Any]) -> str:
        header = None
        if structure.header is not None:
            header = interpolate(structure.header, data)

        blocks = []
        for section in structure.sections:
            block = self._section_block(section, data)
            if block is not None:
                blocks.append(block)

        return self._template.render(
            title=structure.title or self.settings.default_title,
            header=header,
            blocks=blocks,
        )

    def _section_block(self, section: Section, data: Mapping[str, Any]) -> dict[str, Any] | None:
        """Section → 템플릿 렌더용 블록 dict."""
        if isinstance(section, Table):
            rows = resolve_sequence(section.data_key, data)
            columns = table_columns(section, rows)
            return {
                "kind": "table",
                "title": section.title,
                "columns": columns,
                "rows": [
                    [format_value(lookup_cell(row, col)) for col in columns]
                    for row in rows
                ],
            }
        if isinstance(section, Paragraph):
            return {
                "kind": "paragraph",
                "text": interpolate(section.content, data),
                "align": section.align.value if section.align is not None else None,
            }
        if isinstance(section, Heading):
            return {"kind": "heading", "text": interpolate(section.content, data)}
        if isinstance(section, ListSection):
            return {
                "kind": "list",
                "tag": "ol" if section.ordered else "ul",
                "entries": [
                    list_item_text(section, item)
                    for item in resolve_sequence(section.data_key, data)
                ],
            }
        if isinstance(section, UnknownSection):
            self.warn_unknown_section(section)
        return None
