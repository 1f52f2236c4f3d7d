"""
Domain Constants: 렌더링 전역 상수.

포맷 ID, MIME 타입, 확장자, placeholder 문법 등 시스템 전반에서 사용되는 값들.
"""

import os
import re

# =============================================================================
# Format IDs (포맷 식별자)
# =============================================================================
# canonical: markup / tabular / paginated
# alias: html / csv / pdf (기존 포맷명 호환), word / spreadsheet

FORMAT_MARKUP = "markup"
FORMAT_TABULAR = "tabular"
FORMAT_PAGINATED = "paginated"
FORMAT_DOCX = "docx"
FORMAT_XLSX = "xlsx"

FORMAT_ALIASES = {
    "html": FORMAT_MARKUP,
    "csv": FORMAT_TABULAR,
    "pdf": FORMAT_PAGINATED,
    "word": FORMAT_DOCX,
    "spreadsheet": FORMAT_XLSX,
}

# =============================================================================
# Placeholder Syntax
# =============================================================================
# {{identifier(.identifier)*}}

PLACEHOLDER_PATTERN = re.compile(r"\{\{([\w.]+)\}\}")
PATH_SEPARATOR = "."

# =============================================================================
# MIME Types
# =============================================================================

MIME_TYPES = {
    ".html": "text/html",
    ".csv": "text/csv",
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def get_mime_type(filename: str) -> str:
    """
    파일명에서 MIME 타입 추출.

    Args:
        filename: 파일명 (확장자 포함)

    Returns:
        MIME 타입 문자열 (알 수 없으면 octet-stream)
    """
    ext = os.path.splitext(filename)[1].lower()
    return MIME_TYPES.get(ext, "application/octet-stream")


# =============================================================================
# Output Defaults
# =============================================================================

DEFAULT_DOCUMENT_TITLE = "Document"
ELLIPSIS = "..."
