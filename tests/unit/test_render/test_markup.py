"""
test_markup.py - HTML 렌더러 테스트

검증:
- 문서 shell (title, style, body)
- section별 태그 매핑
- 치환 값은 escape 하지 않음 (기존 출력 호환)
"""

from docrender.core.config import MarkupSettings, RenderConfig
from docrender.domain.structure import DocumentStructure, Paragraph, Table
from docrender.render.markup import MarkupRenderer


class TestDocumentShell:
    def test_title_and_shell(self, invoice, invoice_data):
        html = MarkupRenderer().render(invoice, invoice_data)

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Invoice</title>" in html
        assert "<style>" in html
        assert html.rstrip().endswith("</html>")

    def test_default_title(self):
        html = MarkupRenderer().render(DocumentStructure(), {})
        assert "<title>Document</title>" in html

    def test_configured_default_title(self):
        config = RenderConfig(markup=MarkupSettings(default_title="Untitled"))
        html = MarkupRenderer(config).render(DocumentStructure(), {})
        assert "<title>Untitled</title>" in html

    def test_content_type(self):
        assert MarkupRenderer().content_type() == "text/html"
        assert MarkupRenderer().file_extension() == "html"


class TestInvoiceMarkup:
    def test_header_and_paragraphs(self, invoice, invoice_data):
        html = MarkupRenderer().render(invoice, invoice_data)

        assert "<h1>Invoice #INV-2025-001</h1>" in html
        assert "<p>Date: 2025-11-01 | Customer: Acme Corp</p>" in html
        assert "<p>Total Amount: $580</p>" in html

    def test_table(self, invoice, invoice_data):
        html = MarkupRenderer().render(invoice, invoice_data)

        assert "<h3>Items</h3>" in html
        assert "<th>Name</th>" in html
        assert "<th>Total</th>" in html
        assert html.count("<tr>") == 4  # 헤더 1 + 데이터 3
        assert "<td>Widget A</td>" in html
        assert "<td>25.5</td>" in html
        assert "<td>255</td>" in html

    def test_missing_placeholder_is_visible(self, invoice, invoice_data):
        del invoice_data["customerName"]

        html = MarkupRenderer().render(invoice, invoice_data)

        assert "Customer: {{customerName}}" in html


class TestSections:
    def test_full_structure(self, full_structure, full_data):
        html = MarkupRenderer().render(full_structure, full_data)

        assert "<h1>Report for Globex</h1>" in html
        assert "<h2>Summary</h2>" in html
        assert '<p style="text-align: right">Prepared on 2025-11-02</p>' in html
        assert "<ul>\n<li>first note</li>\n<li>second note</li>\n</ul>" in html
        assert "<ol>\n<li>Draft (Kim)</li>\n<li>Review (Lee)</li>\n</ol>" in html
        assert "<td>Nut</td>\n<td>0</td>" in html
        assert "chart" not in html

    def test_section_order_preserved(self, full_structure, full_data):
        html = MarkupRenderer().render(full_structure, full_data)

        positions = [
            html.index(marker)
            for marker in ("<h2>Summary", "<p style", "<ul>", "<ol>", "<h3>Lines")
        ]
        assert positions == sorted(positions)

    def test_missing_cell_is_empty(self):
        structure = DocumentStructure(sections=(Table(data_key="rows", columns=("A", "B")),))

        html = MarkupRenderer().render(structure, {"rows": [{"a": 1}]})

        assert "<td>1</td>\n<td></td>" in html

    def test_values_not_escaped(self):
        structure = DocumentStructure(sections=(Paragraph(content="{{note}}"),))

        html = MarkupRenderer().render(structure, {"note": "<b>bold</b> & more"})

        assert "<p><b>bold</b> & more</p>" in html

    def test_template_syntax_in_data_is_literal(self):
        structure = DocumentStructure(sections=(Paragraph(content="{{note}}"),))

        html = MarkupRenderer().render(structure, {"note": "{{ 7 * 7 }} {% if x %}"})

        assert "<p>{{ 7 * 7 }} {% if x %}</p>" in html


class TestHeaderAndRepeatability:
    def test_no_header_no_h1(self):
        structure = DocumentStructure(title="Memo", sections=(Paragraph(content="Body"),))

        html = MarkupRenderer().render(structure, {})

        assert "<h1>" not in html
        assert "<title>Memo</title>" in html
        assert "<p>Body</p>" in html

    def test_repeated_render_identical(self, full_structure, full_data):
        renderer = MarkupRenderer()

        assert renderer.render(full_structure, full_data) == renderer.render(full_structure, full_data)
