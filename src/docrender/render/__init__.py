"""
Render layer: 구조 + 데이터 → 포맷별 payload.

역할:
- markup (HTML, Jinja2), tabular (CSV), paginated (PDF, reportlab)
- docx (python-docx), xlsx (openpyxl)
- 포맷 ID → 렌더러 registry
"""

from .base import Renderer, StructureSource
from .excel import ExcelRenderer
from .markup import MarkupRenderer
from .paginated import PaginatedRenderer
from .registry import RendererRegistry, default_registry
from .tabular import TabularRenderer
from .word import DocxRenderer

__all__ = [
    "Renderer",
    "StructureSource",
    "MarkupRenderer",
    "TabularRenderer",
    "PaginatedRenderer",
    "DocxRenderer",
    "ExcelRenderer",
    "RendererRegistry",
    "default_registry",
]
