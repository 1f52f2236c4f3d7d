"""
Pagination / layout engine (reportlab canvas).

좌표계:
- LayoutCursor.y 는 페이지 상단 기준 (아래로 증가)
- reportlab 은 하단 기준 → 그리기 직전에만 변환 (page_height - y)

페이지 번호:
- NumberedCanvas 가 showPage() 마다 페이지 상태를 버퍼링
- save() 시점에 전체 페이지 수 N 확정 → 각 페이지에 "Page i of N" stamp (2-pass)

상태:
- PageLayout / LayoutCursor 는 렌더 1회 전용 (렌더러 인스턴스에 저장 금지)
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from reportlab.lib import colors
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from docrender.core.config import PageSettings, PaginatedSettings
from docrender.domain.constants import ELLIPSIS
from docrender.domain.structure import Alignment

logger = logging.getLogger(__name__)

HEADER_FILL = colors.HexColor("#f0f0f0")
HEADER_STROKE = colors.HexColor("#000000")
ROW_STROKE = colors.HexColor("#cccccc")
TEXT_COLOR = colors.HexColor("#000000")

# 폰트 크기 대비 줄 높이 (ascent + descent 근사)
LINE_HEIGHT_FACTOR = 1.2


# =============================================================================
# Canvas
# =============================================================================

class NumberedCanvas(canvas.Canvas):
    """
    "Page i of N" footer를 save() 시점에 stamp 하는 canvas.

    showPage()는 페이지를 즉시 내보내지 않고 상태만 저장.
    """

    def __init__(
        self,
        *args: Any,
        footer_font: str = "Helvetica",
        footer_size: float = 10,
        footer_y: float = 30,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self._saved_page_states: list[dict[str, Any]] = []
        self._footer_font = footer_font
        self._footer_size = footer_size
        self._footer_y = footer_y

    def showPage(self) -> None:  # noqa: N802 (reportlab API)
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total = len(self._saved_page_states)
        for number, state in enumerate(self._saved_page_states, start=1):
            self.__dict__.update(state)
            self.draw_page_footer(number, total)
            super().showPage()
        super().save()

    @property
    def buffered_page_count(self) -> int:
        return len(self._saved_page_states)

    def draw_page_footer(self, number: int, total: int) -> None:
        width = self._pagesize[0]
        self.setFont(self._footer_font, self._footer_size)
        self.setFillColor(TEXT_COLOR)
        self.drawCentredString(width / 2, self._footer_y, f"Page {number} of {total}")


# =============================================================================
# Cursor
# =============================================================================

@dataclass
class LayoutCursor:
    """현재 페이지의 세로 쓰기 위치 (상단 기준 pt)."""
    top: float
    bottom: float
    y: float
    page_count: int = 1

    @property
    def capacity(self) -> float:
        """빈 페이지 1장의 사용 가능 높이."""
        return self.bottom - self.top

    @property
    def at_page_top(self) -> bool:
        return self.y <= self.top

    def fits(self, height: float) -> bool:
        return self.y + height <= self.bottom

    def advance(self, height: float) -> None:
        self.y += height

    def reset(self) -> None:
        """새 페이지: 상단 margin 으로 복귀."""
        self.y = self.top
        self.page_count += 1


# =============================================================================
# Text Helpers
# =============================================================================

def line_height(font_size: float, line_gap: float = 0) -> float:
    return font_size * LINE_HEIGHT_FACTOR + line_gap


def fit_text(text: str, font: str, size: float, max_width: float) -> str:
    """
    셀 폭에 맞게 텍스트 자르기 (줄바꿈 대신 말줄임).

    Args:
        text: 원본 텍스트
        font: 폰트 이름
        size: 폰트 크기
        max_width: 허용 폭 (pt)

    Returns:
        폭 안에 들어가는 텍스트 (잘린 경우 ELLIPSIS 로 끝남)
    """
    text = " ".join(text.splitlines())
    if stringWidth(text, font, size) <= max_width:
        return text

    if stringWidth(ELLIPSIS, font, size) > max_width:
        return ""

    # 이진 탐색: ELLIPSIS 포함해서 들어가는 최대 prefix
    low, high = 0, len(text)
    while low < high:
        mid = (low + high + 1) // 2
        if stringWidth(text[:mid].rstrip() + ELLIPSIS, font, size) <= max_width:
            low = mid
        else:
            high = mid - 1
    return text[:low].rstrip() + ELLIPSIS


# =============================================================================
# Page Layout
# =============================================================================

class PageLayout:
    """
    렌더 1회용 레이아웃 컨텍스트: canvas + cursor + 그리기 primitive.

    Usage:
        layout = PageLayout(c, page, settings)
        layout.draw_text("Hello", font="Helvetica", size=12)
        layout.draw_table(columns, rows)
        layout.finish()
    """

    def __init__(
        self,
        c: NumberedCanvas,
        page: PageSettings,
        settings: PaginatedSettings,
    ):
        self.canvas = c
        self.settings = settings
        self.page_width, self.page_height = page.dimensions
        self.margin = page.margin
        self.cursor = LayoutCursor(
            top=page.margin,
            bottom=self.page_height - page.margin,
            y=page.margin,
        )

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    def new_page(self) -> None:
        self.canvas.showPage()
        self.cursor.reset()

    def ensure_space(self, height: float) -> bool:
        """남은 공간이 부족하면 새 페이지. 새 페이지를 시작했으면 True."""
        if self.cursor.fits(height) or self.cursor.at_page_top:
            return False
        self.new_page()
        return True

    def finish(self) -> int:
        """
        마지막 페이지 확정 + footer stamp + 저장.

        Returns:
            전체 페이지 수
        """
        self.canvas.showPage()
        total = self.canvas.buffered_page_count
        if total != self.cursor.page_count:
            logger.warning(
                f"Page count mismatch: cursor={self.cursor.page_count}, canvas={total}"
            )
        self.canvas.save()
        return total

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    def draw_text(
        self,
        text: str,
        font: str,
        size: float,
        align: Alignment = Alignment.LEFT,
        indent: float = 0,
        line_gap: float = 0,
    ) -> float:
        """
        텍스트 블록 그리기 (폭에 맞춰 줄바꿈, 줄 단위로 페이지 넘김).

        Returns:
            그린 블록 높이 (페이지 넘김 포함 누적)
        """
        width = self.content_width - indent
        lines = simpleSplit(text, font, size, width) or [""]
        leading = line_height(size, line_gap)
        drawn = 0.0

        for line in lines:
            self.ensure_space(leading)
            baseline = self._to_pdf_y(self.cursor.y + size)
            self.canvas.setFont(font, size)
            self.canvas.setFillColor(TEXT_COLOR)

            left = self.margin + indent
            if align == Alignment.CENTER:
                self.canvas.drawCentredString(left + width / 2, baseline, line)
            elif align == Alignment.RIGHT:
                self.canvas.drawRightString(left + width, baseline, line)
            else:
                self.canvas.drawString(left, baseline, line)

            self.cursor.advance(leading)
            drawn += leading

        return drawn

    def text_height(self, text: str, font: str, size: float, line_gap: float = 0) -> float:
        lines = simpleSplit(text, font, size, self.content_width) or [""]
        return len(lines) * line_height(size, line_gap)

    # -------------------------------------------------------------------------
    # Table
    # -------------------------------------------------------------------------

    def draw_table(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[str]],
        title: str | None = None,
    ) -> None:
        """
        표 그리기.

        - 균등 폭 컬럼, 고정 row 높이
        - 표 전체가 빈 페이지에 들어가면 통째로 다음 페이지로 (lookahead)
        - row 단위 overflow 시 새 페이지 + 헤더 row 다시 그림
        """
        s = self.settings
        row_height = s.row_height
        column_width = self.content_width / len(columns)

        title_height = 0.0
        if title is not None:
            title_height = self.text_height(title, s.bold_font, s.heading_size) + s.line_gap

        table_height = title_height + (len(rows) + 1) * row_height
        min_block = title_height + 2 * row_height  # title + header + 첫 row

        if not self.cursor.fits(table_height) and not self.cursor.at_page_top:
            if table_height <= self.cursor.capacity or not self.cursor.fits(min_block):
                self.new_page()

        if title is not None:
            self.draw_text(title, s.bold_font, s.heading_size)
            self.cursor.advance(s.line_gap)

        self._draw_row(columns, column_width, header=True)

        for values in rows:
            if not self.cursor.fits(row_height):
                self.new_page()
                self._draw_row(columns, column_width, header=True)
            self._draw_row(values, column_width, header=False)

    def _draw_row(self, values: Sequence[str], column_width: float, header: bool) -> None:
        s = self.settings
        c = self.canvas
        row_height = s.row_height
        top = self.cursor.y
        bottom_pdf = self._to_pdf_y(top + row_height)
        font = s.bold_font if header else s.font

        for index in range(len(values)):
            cell_x = self.margin + index * column_width
            if header:
                c.setFillColor(HEADER_FILL)
                c.setStrokeColor(HEADER_STROKE)
                c.rect(cell_x, bottom_pdf, column_width, row_height, stroke=1, fill=1)
            else:
                c.setStrokeColor(ROW_STROKE)
                c.rect(cell_x, bottom_pdf, column_width, row_height, stroke=1, fill=0)

        baseline = self._to_pdf_y(top + (row_height + s.table_font_size * 0.7) / 2)
        max_text_width = column_width - 2 * s.cell_padding
        c.setFont(font, s.table_font_size)
        c.setFillColor(TEXT_COLOR)
        for index, value in enumerate(values):
            cell_x = self.margin + index * column_width
            text = fit_text(value, font, s.table_font_size, max_text_width)
            if text:
                c.drawString(cell_x + s.cell_padding, baseline, text)

        self.cursor.advance(row_height)

    def _to_pdf_y(self, y_from_top: float) -> float:
        return self.page_height - y_from_top
