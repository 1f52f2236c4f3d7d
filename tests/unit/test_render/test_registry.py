"""
test_registry.py - 렌더러 registry 테스트

검증:
- 기본 포맷 + alias
- 대소문자 무시 조회
- 미지원 포맷 → UNSUPPORTED_FORMAT
- register() 로 새 포맷 추가 / 덮어쓰기
"""

import pytest

from docrender.domain.errors import ErrorCodes, RenderRejectError
from docrender.domain.structure import DocumentStructure
from docrender.render.base import Renderer
from docrender.render.markup import MarkupRenderer
from docrender.render.paginated import PaginatedRenderer
from docrender.render.registry import RendererRegistry
from docrender.render.tabular import TabularRenderer


class PlainTextRenderer(Renderer):
    format_name = "text"

    def build(self, structure, data):
        return structure.title or ""

    def content_type(self):
        return "text/plain"

    def file_extension(self):
        return "txt"


class TestDefaultRegistry:
    def test_formats(self, registry):
        assert registry.formats() == sorted([
            "markup", "tabular", "paginated", "docx", "xlsx",
            "html", "csv", "pdf", "word", "spreadsheet",
        ])

    def test_aliases_share_instances(self, registry):
        assert registry.get("html") is registry.get("markup")
        assert registry.get("csv") is registry.get("tabular")
        assert registry.get("pdf") is registry.get("paginated")

    def test_renderer_types(self, registry):
        assert isinstance(registry.get("markup"), MarkupRenderer)
        assert isinstance(registry.get("tabular"), TabularRenderer)
        assert isinstance(registry.get("paginated"), PaginatedRenderer)

    @pytest.mark.parametrize("name", ["PDF", "Html", "CSV"])
    def test_case_insensitive(self, registry, name):
        assert registry.get(name) is registry.get(name.lower())
        assert name in registry

    def test_unsupported_format(self, registry):
        with pytest.raises(RenderRejectError) as exc_info:
            registry.get("rtf")

        error = exc_info.value
        assert error.code == ErrorCodes.UNSUPPORTED_FORMAT
        assert error.context["format"] == "rtf"
        assert "Unsupported format: rtf" in str(error)
        assert "rtf" not in registry


class TestRegister:
    def test_register_new_format(self):
        registry = RendererRegistry()
        renderer = PlainTextRenderer()

        registry.register("Text", renderer)

        assert registry.get("text") is renderer
        assert registry.formats() == ["text"]

    def test_register_overwrites(self, registry, caplog):
        renderer = PlainTextRenderer()

        with caplog.at_level("INFO"):
            registry.register("pdf", renderer)

        assert registry.get("pdf") is renderer
        assert registry.get("paginated") is not renderer
        assert "replaced" in caplog.text

    def test_register_rejects_empty_name(self):
        with pytest.raises(ValueError):
            RendererRegistry().register("", PlainTextRenderer())

    def test_register_rejects_non_renderer(self):
        with pytest.raises(TypeError):
            RendererRegistry().register("text", object())


class TestRendererErrors:
    def test_unexpected_error_wrapped(self):
        class BrokenRenderer(PlainTextRenderer):
            def build(self, structure, data):
                raise ZeroDivisionError("boom")

        with pytest.raises(RenderRejectError) as exc_info:
            BrokenRenderer().render(DocumentStructure(), {})

        assert exc_info.value.code == ErrorCodes.RENDER_FAILED
        assert exc_info.value.context["format"] == "text"
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)


class TestContentType:
    def test_default_content_type_from_extension(self):
        class LogRenderer(Renderer):
            format_name = "log"

            def build(self, structure, data):
                return ""

            def file_extension(self):
                return "log"

        assert LogRenderer().content_type() == "application/octet-stream"
        assert TabularRenderer().content_type() == "text/csv"
