"""
Pytest fixtures for the rendering pipeline tests.

구성:
- 데이터 레코드 (invoice 정상 케이스, 대량 row 케이스)
- 구조 (4종 section + 알 수 없는 section)
- 엔진 / registry
"""

import io
from pathlib import Path

import pytest
from pypdf import PdfReader

from docrender.domain.structure import (
    Alignment,
    DocumentStructure,
    Heading,
    ListSection,
    Paragraph,
    Table,
    UnknownSection,
)
from docrender.engine import TemplateEngine
from docrender.render.registry import RendererRegistry, default_registry
from docrender.templates.base import DocumentTemplate
from docrender.templates.invoice import invoice_template

# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def invoice_data() -> dict:
    """invoice 정상 데이터 (3 items)."""
    return {
        "invoiceNumber": "INV-2025-001",
        "date": "2025-11-01",
        "customerName": "Acme Corp",
        "items": [
            {"name": "Widget A", "quantity": 10, "price": 25.50, "total": 255.00},
            {"name": "Widget B", "quantity": 5, "price": 45.00, "total": 225.00},
            {"name": "Service Fee", "quantity": 1, "price": 100.00, "total": 100.00},
        ],
        "total": 580.00,
    }


@pytest.fixture
def single_item_data() -> dict:
    """item 1개짜리 invoice 데이터."""
    return {
        "invoiceNumber": "INV-2025-002",
        "date": "2025-11-01",
        "customerName": "Acme Corp",
        "items": [
            {"name": "Widget A", "quantity": 10, "price": 25.50, "total": 255.00},
        ],
        "total": 255.00,
    }


def make_rows(count: int) -> list[dict]:
    """대량 row 생성 (페이지 넘김 테스트용)."""
    return [
        {"name": f"Item {i}", "quantity": i, "price": 1.5, "total": 1.5 * i}
        for i in range(1, count + 1)
    ]


@pytest.fixture
def many_items_data() -> dict:
    """40 items → A4 한 장 초과."""
    return {
        "invoiceNumber": "INV-2025-040",
        "date": "2025-11-01",
        "customerName": "Acme Corp",
        "items": make_rows(40),
        "total": 1230,
    }


# =============================================================================
# Structure / Template Fixtures
# =============================================================================

@pytest.fixture
def invoice() -> DocumentTemplate:
    """invoice 템플릿."""
    return invoice_template()


@pytest.fixture
def full_structure() -> DocumentStructure:
    """4종 section + 알 수 없는 section."""
    return DocumentStructure(
        title="Report",
        header="Report for {{customer.name}}",
        sections=(
            Heading(content="Summary"),
            Paragraph(content="Prepared on {{date}}", align=Alignment.RIGHT),
            ListSection(data_key="notes", ordered=False),
            ListSection(data_key="steps", ordered=True, template="{{title}} ({{owner}})"),
            Table(title="Lines", data_key="lines", columns=("Item", "Unit Price")),
            UnknownSection(kind="chart", fields={"dataKey": "lines"}),
        ),
    )


@pytest.fixture
def full_data() -> dict:
    """full_structure 용 데이터."""
    return {
        "customer": {"name": "Globex"},
        "date": "2025-11-02",
        "notes": ["first note", "second note"],
        "steps": [
            {"title": "Draft", "owner": "Kim"},
            {"title": "Review", "owner": "Lee"},
        ],
        "lines": [
            {"item": "Bolt", "unit_price": 0.25},
            {"item": "Nut", "unit_price": 0},
        ],
    }


# =============================================================================
# Engine Fixtures
# =============================================================================

@pytest.fixture
def registry() -> RendererRegistry:
    """기본 registry (테스트마다 새 인스턴스)."""
    return default_registry()


@pytest.fixture
def engine(registry: RendererRegistry) -> TemplateEngine:
    """TemplateEngine 인스턴스."""
    return TemplateEngine(registry)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """출력 디렉토리 (아직 생성되지 않음)."""
    return tmp_path / "output" / "invoices"


# =============================================================================
# PDF Helpers
# =============================================================================

def pdf_page_texts(content: bytes) -> list[str]:
    """PDF bytes → 페이지별 추출 텍스트."""
    reader = PdfReader(io.BytesIO(content))
    return [page.extract_text() or "" for page in reader.pages]


@pytest.fixture
def read_pdf_pages():
    """pdf_page_texts 를 fixture 로 제공."""
    return pdf_page_texts


@pytest.fixture
def rows_factory():
    """make_rows 를 fixture 로 제공."""
    return make_rows
