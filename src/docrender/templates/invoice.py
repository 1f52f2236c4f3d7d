"""
Invoice 템플릿 (예시 구조 제공자).

필수 필드:
- invoiceNumber
- items (list)
"""

from docrender.domain.structure import DocumentStructure, Paragraph, Table
from docrender.templates.base import DocumentTemplate

INVOICE_COLUMNS = ("Name", "Quantity", "Price", "Total")

INVOICE_STRUCTURE = DocumentStructure(
    title="Invoice",
    header="Invoice #{{invoiceNumber}}",
    sections=(
        Paragraph(content="Date: {{date}} | Customer: {{customerName}}"),
        Table(title="Items", data_key="items", columns=INVOICE_COLUMNS),
        Paragraph(content="Total Amount: ${{total}}"),
    ),
)


def invoice_template() -> DocumentTemplate:
    """invoice 템플릿 인스턴스."""
    return DocumentTemplate(
        name="invoice",
        structure=INVOICE_STRUCTURE,
        required_fields=("invoiceNumber",),
        required_sequences=("items",),
    )
