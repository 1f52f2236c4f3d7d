"""
Document structure model.

구조(structure)는 템플릿이 생성하는 불변 트리:
- title: 인쇄용 장식 (optional)
- header: placeholder 포함 템플릿 문자열 (optional)
- sections: Paragraph | Heading | Table | ListSection 순서열

알 수 없는 section type은 UnknownSection으로 보존 (forward-compatible).
렌더러는 UnknownSection을 경고 후 건너뜀.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from docrender.domain.errors import ErrorCodes, RenderRejectError

# =============================================================================
# Enums
# =============================================================================

class SectionKind(str, Enum):
    """Section 종류 (wire 포맷의 type 태그)."""
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TABLE = "table"
    LIST = "list"


class Alignment(str, Enum):
    """Paragraph 정렬 힌트."""
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


# =============================================================================
# Sections
# =============================================================================

@dataclass(frozen=True)
class Paragraph:
    """본문 단락. content는 placeholder 포함 가능."""
    content: str
    align: Alignment | None = None

    kind = SectionKind.PARAGRAPH


@dataclass(frozen=True)
class Heading:
    """소제목."""
    content: str

    kind = SectionKind.HEADING


@dataclass(frozen=True)
class Table:
    """
    표.

    data_key: 데이터 레코드 내 row 목록 경로 (dotted)
    columns: 비어 있으면 첫 번째 row의 키 순서를 사용
    """
    data_key: str
    columns: tuple[str, ...] = ()
    title: str | None = None

    kind = SectionKind.TABLE


@dataclass(frozen=True)
class ListSection:
    """
    목록.

    item이 문자열이면 그대로, mapping이면 template으로 interpolate.
    """
    data_key: str
    ordered: bool = False
    template: str | None = None

    kind = SectionKind.LIST


@dataclass(frozen=True)
class UnknownSection:
    """인식하지 못한 section type (원본 필드 보존)."""
    kind: str
    fields: Mapping[str, Any] = field(default_factory=dict)


Section = Union[Paragraph, Heading, Table, ListSection, UnknownSection]


# =============================================================================
# Document Structure
# =============================================================================

@dataclass(frozen=True)
class DocumentStructure:
    """템플릿 1개당 1회 생성, 렌더 호출 간 재사용 (불변)."""
    title: str | None = None
    header: str | None = None
    sections: tuple[Section, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DocumentStructure":
        """
        wire 포맷(dict) → DocumentStructure.

        Args:
            data: {"title", "header", "sections": [{"type": ..., ...}]}

        Returns:
            DocumentStructure

        Raises:
            RenderRejectError: INVALID_STRUCTURE
        """
        if not isinstance(data, Mapping):
            raise RenderRejectError(
                ErrorCodes.INVALID_STRUCTURE,
                message="structure must be a mapping",
                got=type(data).__name__,
            )

        raw_sections = data.get("sections") or []
        if isinstance(raw_sections, (str, bytes)) or not isinstance(raw_sections, Sequence):
            raise RenderRejectError(
                ErrorCodes.INVALID_STRUCTURE,
                message="sections must be a list",
            )

        return cls(
            title=_optional_str(data, "title"),
            header=_optional_str(data, "header"),
            sections=tuple(
                parse_section(raw, index) for index, raw in enumerate(raw_sections)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON/YAML 직렬화용 (from_dict 역변환)."""
        result: dict[str, Any] = {}
        if self.title is not None:
            result["title"] = self.title
        if self.header is not None:
            result["header"] = self.header
        result["sections"] = [section_to_dict(s) for s in self.sections]
        return result


# =============================================================================
# Parsing
# =============================================================================

def parse_section(raw: Mapping[str, Any], index: int = 0) -> Section:
    """
    section dict → Section.

    알려진 type의 필수 필드가 없으면 fail-fast,
    알 수 없는 type은 UnknownSection으로 보존.

    Raises:
        RenderRejectError: INVALID_STRUCTURE
    """
    if not isinstance(raw, Mapping):
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message="section must be a mapping",
            index=index,
        )

    kind = raw.get("type")
    if not isinstance(kind, str) or not kind:
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message="section type is required",
            index=index,
        )

    if kind == SectionKind.PARAGRAPH.value:
        return Paragraph(
            content=_required_str(raw, "content", index),
            align=_parse_align(raw.get("align"), index),
        )
    if kind == SectionKind.HEADING.value:
        return Heading(content=_required_str(raw, "content", index))
    if kind == SectionKind.TABLE.value:
        return Table(
            data_key=_data_key(raw, index),
            columns=_parse_columns(raw.get("columns"), index),
            title=_optional_str(raw, "title"),
        )
    if kind == SectionKind.LIST.value:
        return ListSection(
            data_key=_data_key(raw, index),
            ordered=bool(raw.get("ordered", False)),
            template=_optional_str(raw, "template"),
        )

    fields = {k: v for k, v in raw.items() if k != "type"}
    return UnknownSection(kind=kind, fields=fields)


def section_to_dict(section: Section) -> dict[str, Any]:
    """Section → wire 포맷 dict."""
    if isinstance(section, UnknownSection):
        return {"type": section.kind, **section.fields}

    result: dict[str, Any] = {"type": section.kind.value}
    if isinstance(section, Paragraph):
        result["content"] = section.content
        if section.align is not None:
            result["align"] = section.align.value
    elif isinstance(section, Heading):
        result["content"] = section.content
    elif isinstance(section, Table):
        if section.title is not None:
            result["title"] = section.title
        if section.columns:
            result["columns"] = list(section.columns)
        result["dataKey"] = section.data_key
    elif isinstance(section, ListSection):
        result["dataKey"] = section.data_key
        result["ordered"] = section.ordered
        if section.template is not None:
            result["template"] = section.template
    return result


# =============================================================================
# Column Lookup
# =============================================================================

_WHITESPACE = re.compile(r"\s+")


def column_key(column: str) -> str:
    """컬럼명 → row 필드 키 ("Unit Price" → "unit_price")."""
    return _WHITESPACE.sub("_", column.lower())


def lookup_cell(row: Any, column: str) -> Any:
    """
    row에서 컬럼 값 조회.

    우선순위: column_key() → 소문자 컬럼명 그대로.
    row가 mapping이 아니거나 키가 없으면 None.
    """
    if not isinstance(row, Mapping):
        return None
    key = column_key(column)
    if key in row:
        return row[key]
    return row.get(column.lower())


def table_columns(section: Table, rows: Sequence[Any]) -> list[str]:
    """명시 컬럼, 없으면 첫 row의 키 순서."""
    if section.columns:
        return list(section.columns)
    if rows and isinstance(rows[0], Mapping):
        return [str(k) for k in rows[0].keys()]
    return []


# =============================================================================
# Helpers
# =============================================================================

def _optional_str(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    return None if value is None else str(value)


def _required_str(raw: Mapping[str, Any], key: str, index: int) -> str:
    value = raw.get(key)
    if value is None:
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message=f"{raw.get('type')} section requires '{key}'",
            index=index,
        )
    return str(value)


def _data_key(raw: Mapping[str, Any], index: int) -> str:
    # wire 포맷은 dataKey, YAML 정의는 data_key 도 허용
    value = raw.get("dataKey", raw.get("data_key"))
    if not isinstance(value, str) or not value:
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message=f"{raw.get('type')} section requires 'dataKey'",
            index=index,
        )
    return value


def _parse_align(value: Any, index: int) -> Alignment | None:
    if value is None:
        return None
    try:
        return Alignment(str(value).lower())
    except ValueError as e:
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message="align must be one of left/right/center",
            index=index,
            align=value,
        ) from e


def _parse_columns(value: Any, index: int) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message="columns must be a list of strings",
            index=index,
        )
    return tuple(str(c) for c in value)
