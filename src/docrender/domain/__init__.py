"""Domain layer: errors, constants and the document structure model."""

from .errors import ErrorCodes, RenderRejectError
from .structure import (
    Alignment,
    DocumentStructure,
    Heading,
    ListSection,
    Paragraph,
    Section,
    SectionKind,
    Table,
    UnknownSection,
)

__all__ = [
    "RenderRejectError",
    "ErrorCodes",
    "DocumentStructure",
    "Section",
    "SectionKind",
    "Alignment",
    "Paragraph",
    "Heading",
    "Table",
    "ListSection",
    "UnknownSection",
]
