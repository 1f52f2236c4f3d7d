"""
test_layout.py - 페이지 레이아웃 엔진 테스트

A4 (841.89pt), margin 50 기준:
- 사용 가능 높이 741.89pt, row 25pt → 빈 페이지에 헤더 + 28 row
- lookahead: 빈 페이지에 들어가는 표는 통째로 다음 페이지
- 헤더 row 는 페이지마다 다시 그림
"""

import io

import pytest
from reportlab.pdfbase.pdfmetrics import stringWidth

from docrender.core.config import PageSettings, PaginatedSettings
from docrender.render.layout import (
    LayoutCursor,
    NumberedCanvas,
    PageLayout,
    fit_text,
    line_height,
)


@pytest.fixture
def layout() -> PageLayout:
    page = PageSettings()
    c = NumberedCanvas(io.BytesIO(), pagesize=page.dimensions, invariant=1)
    return PageLayout(c, page, PaginatedSettings())


def table_rows(count: int) -> list[list[str]]:
    return [[f"Item {i}", str(i)] for i in range(count)]


# =============================================================================
# Cursor
# =============================================================================

class TestLayoutCursor:
    def test_fits_and_advance(self):
        cursor = LayoutCursor(top=50, bottom=100, y=50)

        assert cursor.capacity == 50
        assert cursor.at_page_top
        assert cursor.fits(50)
        assert not cursor.fits(51)

        cursor.advance(30)
        assert not cursor.at_page_top
        assert not cursor.fits(21)

    def test_reset_counts_pages(self):
        cursor = LayoutCursor(top=50, bottom=100, y=90)

        cursor.reset()

        assert cursor.y == 50
        assert cursor.page_count == 2


class TestTextHelpers:
    def test_line_height(self):
        assert line_height(10) == pytest.approx(12)
        assert line_height(12, 5) == pytest.approx(19.4)

    def test_fit_text_short_unchanged(self):
        assert fit_text("Widget", "Helvetica", 10, 200) == "Widget"

    def test_fit_text_truncates_with_ellipsis(self):
        text = "A very long product description that cannot fit"

        fitted = fit_text(text, "Helvetica", 10, 60)

        assert fitted.endswith("...")
        assert len(fitted) < len(text)
        assert stringWidth(fitted, "Helvetica", 10) <= 60

    def test_fit_text_too_narrow_is_empty(self):
        assert fit_text("Widget", "Helvetica", 10, 2) == ""

    def test_fit_text_joins_lines(self):
        assert fit_text("a\nb", "Helvetica", 10, 200) == "a b"


# =============================================================================
# Page Breaks
# =============================================================================

class TestEnsureSpace:
    def test_no_break_at_page_top(self, layout: PageLayout):
        """빈 페이지에서는 아무리 커도 새 페이지를 만들지 않음."""
        assert layout.ensure_space(10_000) is False
        assert layout.cursor.page_count == 1

    def test_break_when_full(self, layout: PageLayout):
        layout.cursor.advance(700)

        assert layout.ensure_space(100) is True
        assert layout.cursor.page_count == 2
        assert layout.cursor.at_page_top

    def test_long_text_spans_pages(self, layout: PageLayout):
        text = " ".join(["word"] * 3000)

        layout.draw_text(text, "Helvetica", 12)

        assert layout.cursor.page_count > 1
        assert layout.finish() == layout.cursor.page_count


class TestDrawTable:
    def test_rows_per_fresh_page(self, layout: PageLayout):
        layout.draw_table(["Name", "Qty"], table_rows(28))

        assert layout.cursor.page_count == 1
        assert layout.cursor.y == pytest.approx(50 + 29 * 25)

    def test_overflow_continues_on_new_page(self, layout: PageLayout):
        layout.draw_table(["Name", "Qty"], table_rows(40))

        # page 1: 헤더 + 28, page 2: 헤더 + 12
        assert layout.cursor.page_count == 2
        assert layout.cursor.y == pytest.approx(50 + 13 * 25)

    def test_table_moved_whole_when_it_fits_fresh_page(self, layout: PageLayout):
        layout.cursor.advance(550)  # y = 600

        layout.draw_table(["Name", "Qty"], table_rows(10))

        assert layout.cursor.page_count == 2
        assert layout.cursor.y == pytest.approx(50 + 11 * 25)

    def test_table_fits_in_place(self, layout: PageLayout):
        layout.cursor.advance(450)  # y = 500

        layout.draw_table(["Name", "Qty"], table_rows(10))

        assert layout.cursor.page_count == 1
        assert layout.cursor.y == pytest.approx(500 + 11 * 25)

    def test_large_table_starts_in_place_when_first_row_fits(self, layout: PageLayout):
        layout.cursor.advance(690)  # y = 740, 헤더 + 1 row 가능

        layout.draw_table(["Name", "Qty"], table_rows(56))

        # page 1: 1 row, page 2: 28, page 3: 27
        assert layout.cursor.page_count == 3
        assert layout.cursor.y == pytest.approx(50 + 28 * 25)

    def test_large_table_moves_when_first_row_does_not_fit(self, layout: PageLayout):
        layout.cursor.advance(730)  # y = 780

        layout.draw_table(["Name", "Qty"], table_rows(56))

        # page 2: 28, page 3: 28
        assert layout.cursor.page_count == 3
        assert layout.cursor.y == pytest.approx(50 + 29 * 25)

    def test_finish_returns_total_pages(self, layout: PageLayout):
        layout.draw_table(["Name", "Qty"], table_rows(80))

        assert layout.finish() == 3
