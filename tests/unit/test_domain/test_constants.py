"""
test_constants.py - 포맷 ID / MIME 타입 상수 테스트
"""

import pytest

from docrender.domain.constants import FORMAT_ALIASES, MIME_TYPES, get_mime_type
from docrender.render.registry import default_registry


class TestGetMimeType:
    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("invoice.html", "text/html"),
            ("invoice.CSV", "text/csv"),
            ("out/invoice.pdf", "application/pdf"),
            ("notes.txt", "application/octet-stream"),
            ("README", "application/octet-stream"),
        ],
    )
    def test_lookup(self, filename, expected):
        assert get_mime_type(filename) == expected


class TestRendererContentTypes:
    """렌더러 content_type 은 MIME_TYPES 에서 확장자로 결정."""

    @pytest.mark.parametrize("format_name", ["markup", "tabular", "paginated", "docx", "xlsx"])
    def test_matches_table(self, format_name):
        renderer = default_registry().get(format_name)

        assert renderer.content_type() == MIME_TYPES[f".{renderer.file_extension()}"]

    def test_aliases_point_to_canonical_formats(self):
        registry = default_registry()

        for alias, canonical in FORMAT_ALIASES.items():
            assert registry.get(alias).content_type() == registry.get(canonical).content_type()
