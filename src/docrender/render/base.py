"""
Renderer 추상 인터페이스.

계약:
- render(source, data) → 포맷별 payload (str 또는 bytes)
- 부수효과 없음 (파일/네트워크 접근 금지), 렌더러 인스턴스는 렌더 간 상태 없음
- section dispatch는 4종 모두 처리, 알 수 없는 종류는 경고 후 건너뜀
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from docrender.core.paths import format_value, interpolate
from docrender.domain.constants import get_mime_type
from docrender.domain.errors import ErrorCodes, RenderRejectError
from docrender.domain.structure import DocumentStructure, ListSection, UnknownSection

logger = logging.getLogger(__name__)


@runtime_checkable
class StructureSource(Protocol):
    """렌더러가 템플릿에 요구하는 capability."""

    def get_structure(self) -> DocumentStructure | Mapping[str, Any]: ...

    def get_name(self) -> str: ...


class Renderer(ABC):
    """
    포맷 렌더러 베이스.

    하위 클래스는 build()만 구현하면 됨.
    """

    format_name: str = ""

    def render(
        self,
        source: StructureSource | DocumentStructure,
        data: Mapping[str, Any],
    ) -> str | bytes:
        """
        구조 + 데이터 → payload.

        Args:
            source: DocumentStructure 또는 get_structure()를 제공하는 템플릿
            data: 검증된 데이터 레코드 (읽기 전용)

        Returns:
            포맷별 payload

        Raises:
            RenderRejectError: INVALID_STRUCTURE, RENDER_FAILED
        """
        structure = coerce_structure(source)
        try:
            return self.build(structure, data)
        except RenderRejectError:
            raise
        except Exception as e:
            raise RenderRejectError(
                ErrorCodes.RENDER_FAILED,
                format=self.format_name,
                error=str(e),
            ) from e

    @abstractmethod
    def build(self, structure: DocumentStructure, data: Mapping[str, Any]) -> str | bytes:
        """구조를 포맷별 payload로 변환."""
        ...

    def content_type(self) -> str:
        """MIME 타입 (확장자 기준, MIME_TYPES 에 없으면 octet-stream)."""
        return get_mime_type(f"{self.format_name}.{self.file_extension()}")

    @abstractmethod
    def file_extension(self) -> str:
        """점(.) 없는 확장자."""
        ...

    def warn_unknown_section(self, section: UnknownSection) -> None:
        logger.warning(
            f"Unknown section type '{section.kind}' skipped by {self.format_name} renderer"
        )


def coerce_structure(source: StructureSource | DocumentStructure) -> DocumentStructure:
    """템플릿/dict/DocumentStructure → DocumentStructure."""
    if isinstance(source, DocumentStructure):
        return source

    structure = source.get_structure()
    if isinstance(structure, DocumentStructure):
        return structure
    return DocumentStructure.from_dict(structure)


def list_item_text(section: ListSection, item: Any) -> str:
    """list item 표시 문자열 (문자열은 그대로, mapping은 template으로 치환)."""
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping) and section.template is not None:
        return interpolate(section.template, item)
    return format_value(item)
