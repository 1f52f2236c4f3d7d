"""
Template abstraction: 구조 트리 + 데이터 검증 hook.

렌더 파이프라인 (render):
    pre_process(data) → validate(data) → renderer.render(template, data) → post_process(result)

- 상속 대신 hook(callable) 조합으로 템플릿별 동작 지정
- 검증 실패는 렌더러 호출 전에 발생 (부분 출력 없음)
- 데이터 레코드는 변경하지 않음
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from docrender.core.paths import MISSING, resolve
from docrender.domain.errors import ErrorCodes, RenderRejectError
from docrender.domain.structure import DocumentStructure
from docrender.render.base import Renderer

logger = logging.getLogger(__name__)

Payload = str | bytes
DataHook = Callable[[Mapping[str, Any]], Mapping[str, Any]]
Validator = Callable[[Mapping[str, Any]], None]
PostHook = Callable[[Payload], Payload]


class Template(Protocol):
    """오케스트레이터가 요구하는 템플릿 capability."""

    def get_name(self) -> str: ...

    def get_structure(self) -> DocumentStructure: ...

    def render(self, renderer: Renderer, data: Mapping[str, Any] | None) -> Payload: ...


@dataclass(frozen=True)
class DocumentTemplate:
    """
    선언형 문서 템플릿.

    Attributes:
        name: 템플릿 이름 (기본 출력 파일명에 사용)
        structure: 문서 구조
        required_fields: 비어 있으면 안 되는 필드 경로 (dotted)
        required_sequences: list 여야 하는 필드 경로
        pre_process: 검증 전 데이터 변환 (기본: 그대로)
        validators: 추가 검증 함수 (실패 시 RenderRejectError raise)
        post_process: 렌더 결과 후처리 (기본: 그대로)
    """
    name: str
    structure: DocumentStructure
    required_fields: tuple[str, ...] = ()
    required_sequences: tuple[str, ...] = ()
    pre_process: DataHook | None = None
    validators: tuple[Validator, ...] = ()
    post_process: PostHook | None = None

    @classmethod
    def from_dict(cls, name: str, structure: Mapping[str, Any], **hooks: Any) -> "DocumentTemplate":
        """wire 포맷 structure dict 로 템플릿 생성."""
        return cls(name=name, structure=DocumentStructure.from_dict(structure), **hooks)

    def get_name(self) -> str:
        return self.name

    def get_structure(self) -> DocumentStructure:
        return self.structure

    def render(self, renderer: Renderer, data: Mapping[str, Any] | None) -> Payload:
        """
        템플릿 렌더링.

        Args:
            renderer: 포맷 렌더러
            data: 데이터 레코드

        Returns:
            렌더 payload

        Raises:
            RenderRejectError: MISSING_DATA, INVALID_DATA, MISSING_REQUIRED_FIELD,
                               INVALID_FIELD_TYPE, RENDER_FAILED
        """
        processed = self.pre_process(data) if self.pre_process and data is not None else data
        validated = self.validate(processed)
        result = renderer.render(self, validated)
        return self.post_process(result) if self.post_process else result

    def validate(self, data: Mapping[str, Any] | None) -> Mapping[str, Any]:
        """
        데이터 검증 (fail-fast).

        Returns:
            검증된 데이터 (입력과 동일 객체)
        """
        if data is None:
            raise RenderRejectError(
                ErrorCodes.MISSING_DATA,
                template=self.name,
                message="Template data cannot be null",
            )
        if not isinstance(data, Mapping):
            raise RenderRejectError(
                ErrorCodes.INVALID_DATA,
                template=self.name,
                message="Template data must be a mapping",
                got=type(data).__name__,
            )

        for path in self.required_fields:
            value = resolve(path, data)
            if value is MISSING or value is None or value == "":
                raise RenderRejectError(
                    ErrorCodes.MISSING_REQUIRED_FIELD,
                    template=self.name,
                    field=path,
                    message=f"'{path}' is required",
                )

        for path in self.required_sequences:
            value = resolve(path, data)
            if value is MISSING or value is None:
                raise RenderRejectError(
                    ErrorCodes.MISSING_REQUIRED_FIELD,
                    template=self.name,
                    field=path,
                    message=f"'{path}' list is required",
                )
            if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
                raise RenderRejectError(
                    ErrorCodes.INVALID_FIELD_TYPE,
                    template=self.name,
                    field=path,
                    expected="list",
                    got=type(value).__name__,
                )

        for validator in self.validators:
            validator(data)

        logger.debug(f"Template '{self.name}' data validated")
        return data
