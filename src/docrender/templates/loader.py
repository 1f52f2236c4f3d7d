"""
YAML 템플릿 정의 로더.

정의 파일 형식:
    name: invoice
    title: Invoice
    header: "Invoice #{{invoiceNumber}}"
    required_fields: [invoiceNumber]
    required_sequences: [items]
    sections:
      - type: paragraph
        content: "Date: {{date}}"
      - type: table
        dataKey: items
        columns: [Name, Quantity]

name 규칙:
- 소문자 + 숫자 + 언더스코어, 시작/끝은 영숫자
- 최대 50자
"""

import logging
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from docrender.domain.errors import ErrorCodes, RenderRejectError
from docrender.domain.structure import DocumentStructure
from docrender.templates.base import DocumentTemplate

logger = logging.getLogger(__name__)

TEMPLATE_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_]*[a-z0-9]$")
TEMPLATE_ID_MAX_LENGTH = 50
TEMPLATE_SUFFIXES = (".yaml", ".yml")

DEFINITION_KEYS = {
    "name",
    "title",
    "header",
    "required_fields",
    "required_sequences",
    "sections",
}


def validate_template_id(template_id: str) -> None:
    """
    템플릿 이름 유효성 검증.

    Raises:
        RenderRejectError: INVALID_TEMPLATE_ID
    """
    if not template_id:
        raise RenderRejectError(
            ErrorCodes.INVALID_TEMPLATE_ID,
            message="template name cannot be empty",
        )

    if len(template_id) > TEMPLATE_ID_MAX_LENGTH:
        raise RenderRejectError(
            ErrorCodes.INVALID_TEMPLATE_ID,
            message=f"template name exceeds {TEMPLATE_ID_MAX_LENGTH} characters",
            length=len(template_id),
        )

    if not TEMPLATE_ID_PATTERN.match(template_id):
        raise RenderRejectError(
            ErrorCodes.INVALID_TEMPLATE_ID,
            message="template name must be lowercase alphanumeric with underscores, "
                    "start/end with alphanumeric",
            name=template_id,
        )


def template_from_definition(definition: dict[str, Any], source: str = "<dict>") -> DocumentTemplate:
    """
    정의 dict → DocumentTemplate.

    Args:
        definition: YAML 로드 결과
        source: 에러 메시지용 출처

    Raises:
        RenderRejectError: INVALID_TEMPLATE_ID, INVALID_STRUCTURE
    """
    unknown = set(definition) - DEFINITION_KEYS
    if unknown:
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message="unknown template definition keys",
            source=source,
            keys=sorted(unknown),
        )

    name = str(definition.get("name") or "")
    validate_template_id(name)

    structure = DocumentStructure.from_dict(
        {
            "title": definition.get("title"),
            "header": definition.get("header"),
            "sections": definition.get("sections") or [],
        }
    )

    return DocumentTemplate(
        name=name,
        structure=structure,
        required_fields=_paths(definition, "required_fields", source),
        required_sequences=_paths(definition, "required_sequences", source),
    )


def load_template(definition_path: Path) -> DocumentTemplate:
    """
    YAML 정의 파일 로드.

    Args:
        definition_path: 템플릿 정의 YAML 경로

    Returns:
        DocumentTemplate

    Raises:
        RenderRejectError: TEMPLATE_NOT_FOUND, INVALID_STRUCTURE, INVALID_TEMPLATE_ID
    """
    if not definition_path.is_file():
        raise RenderRejectError(
            ErrorCodes.TEMPLATE_NOT_FOUND,
            path=str(definition_path),
        )

    with open(definition_path, encoding="utf-8") as f:
        definition = yaml.safe_load(f)

    if not isinstance(definition, dict):
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message="template definition must be a mapping",
            path=str(definition_path),
        )

    return template_from_definition(definition, source=str(definition_path))


def load_templates(templates_dir: Path) -> dict[str, DocumentTemplate]:
    """
    디렉토리 내 모든 템플릿 정의 로드.

    Args:
        templates_dir: *.yaml / *.yml 정의 파일 디렉토리

    Returns:
        name → DocumentTemplate (없는 디렉토리면 빈 dict)

    Raises:
        RenderRejectError: 정의 오류, 이름 중복 (INVALID_TEMPLATE_ID)
    """
    if not templates_dir.is_dir():
        return {}

    templates: dict[str, DocumentTemplate] = {}
    for path in sorted(templates_dir.iterdir()):
        if path.name.startswith(".") or path.suffix.lower() not in TEMPLATE_SUFFIXES:
            continue

        template = load_template(path)
        if template.name in templates:
            raise RenderRejectError(
                ErrorCodes.INVALID_TEMPLATE_ID,
                message="duplicate template name",
                name=template.name,
                path=str(path),
            )
        templates[template.name] = template

    logger.debug(f"Loaded {len(templates)} template(s) from {templates_dir}")
    return templates


def _paths(definition: dict[str, Any], key: str, source: str) -> tuple[str, ...]:
    value = definition.get(key)
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise RenderRejectError(
            ErrorCodes.INVALID_STRUCTURE,
            message=f"'{key}' must be a list of field paths",
            source=source,
        )
    return tuple(str(v) for v in value)
