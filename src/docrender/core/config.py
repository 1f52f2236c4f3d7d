"""
Render configuration: YAML 설정 로드.

우선순위:
1. load_config(path) 인자
2. DOCRENDER_CONFIG 환경변수
3. 내장 기본값 (A4, margin 50pt, Helvetica)

YAML에 알 수 없는 키가 있으면 fail-fast (오타가 조용히 무시되는 것 방지).
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from reportlab.lib.pagesizes import A4, LEGAL, LETTER

from docrender.domain.constants import DEFAULT_DOCUMENT_TITLE
from docrender.domain.errors import ErrorCodes, RenderRejectError

CONFIG_ENV_VAR = "DOCRENDER_CONFIG"

PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
    "LEGAL": LEGAL,
}


# =============================================================================
# Settings
# =============================================================================

@dataclass
class PageSettings:
    """고정 크기 페이지 + 네 변 동일 margin."""
    size: str = "A4"
    margin: float = 50

    @property
    def dimensions(self) -> tuple[float, float]:
        """(width, height) in pt."""
        return PAGE_SIZES[self.size.upper()]


@dataclass
class PaginatedSettings:
    """PDF 레이아웃 상수 (pt)."""
    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    title_size: float = 18
    heading_size: float = 14
    body_size: float = 12
    table_font_size: float = 10
    footer_font_size: float = 10
    row_height: float = 25
    cell_padding: float = 5
    line_gap: float = 5
    list_indent: float = 20
    list_line_gap: float = 3
    section_spacing: float = 12
    footer_offset: float = 20


@dataclass
class MarkupSettings:
    default_title: str = DEFAULT_DOCUMENT_TITLE


@dataclass
class TabularSettings:
    delimiter: str = ","
    comment_prefix: str = "# "


@dataclass
class RenderConfig:
    """렌더러 전체 설정."""
    page: PageSettings = field(default_factory=PageSettings)
    paginated: PaginatedSettings = field(default_factory=PaginatedSettings)
    markup: MarkupSettings = field(default_factory=MarkupSettings)
    tabular: TabularSettings = field(default_factory=TabularSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderConfig":
        """
        YAML dict → RenderConfig (누락 키는 기본값).

        Raises:
            RenderRejectError: INVALID_CONFIG
        """
        _reject_unknown_keys("", data, cls)
        config = cls(
            page=_build(PageSettings, "page", data.get("page")),
            paginated=_build(PaginatedSettings, "paginated", data.get("paginated")),
            markup=_build(MarkupSettings, "markup", data.get("markup")),
            tabular=_build(TabularSettings, "tabular", data.get("tabular")),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """설정값 검증."""
        if self.page.size.upper() not in PAGE_SIZES:
            raise RenderRejectError(
                ErrorCodes.INVALID_CONFIG,
                message="unsupported page size",
                size=self.page.size,
                supported=sorted(PAGE_SIZES),
            )

        width, height = self.page.dimensions
        if self.page.margin < 0 or self.page.margin * 2 >= min(width, height):
            raise RenderRejectError(
                ErrorCodes.INVALID_CONFIG,
                message="margin leaves no drawable area",
                margin=self.page.margin,
            )

        if self.paginated.row_height <= 0:
            raise RenderRejectError(
                ErrorCodes.INVALID_CONFIG,
                message="row_height must be positive",
                row_height=self.paginated.row_height,
            )

        if len(self.tabular.delimiter) != 1:
            raise RenderRejectError(
                ErrorCodes.INVALID_CONFIG,
                message="delimiter must be a single character",
                delimiter=self.tabular.delimiter,
            )


# =============================================================================
# Loading
# =============================================================================

def load_config(config_path: Path | None = None) -> RenderConfig:
    """
    설정 파일 로드.

    Args:
        config_path: YAML 경로 (None이면 DOCRENDER_CONFIG, 그것도 없으면 기본값)

    Returns:
        RenderConfig

    Raises:
        RenderRejectError: INVALID_CONFIG (형식 오류)
        OSError: 지정한 파일을 읽을 수 없음
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return RenderConfig()
        config_path = Path(env_path)

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return RenderConfig()
    if not isinstance(data, dict):
        raise RenderRejectError(
            ErrorCodes.INVALID_CONFIG,
            message="config root must be a mapping",
            path=str(config_path),
        )

    return RenderConfig.from_dict(data)


def _build(settings_cls: type, section: str, data: Any) -> Any:
    if data is None:
        return settings_cls()
    if not isinstance(data, dict):
        raise RenderRejectError(
            ErrorCodes.INVALID_CONFIG,
            message=f"'{section}' must be a mapping",
        )
    _reject_unknown_keys(section, data, settings_cls)
    return settings_cls(**data)


def _reject_unknown_keys(section: str, data: dict[str, Any], settings_cls: type) -> None:
    known = {f.name for f in fields(settings_cls)}
    unknown = set(data) - known
    if unknown:
        raise RenderRejectError(
            ErrorCodes.INVALID_CONFIG,
            message="unknown config keys",
            section=section or "<root>",
            keys=sorted(unknown),
        )
