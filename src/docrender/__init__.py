"""
docrender: 선언형 문서 구조 + 데이터 레코드 → 다중 포맷 문서.

구성:
- domain/    에러, 상수, 구조 모델
- core/      경로 해석/치환, 설정, 출력 쓰기
- render/    포맷 렌더러 + 레이아웃 엔진 + registry
- templates/ 템플릿 추상화, YAML 로더
- engine.py  오케스트레이터
"""

from .core.config import RenderConfig, load_config
from .core.paths import MISSING, interpolate, resolve
from .domain.errors import ErrorCodes, RenderRejectError
from .domain.structure import (
    Alignment,
    DocumentStructure,
    Heading,
    ListSection,
    Paragraph,
    Table,
)
from .engine import BatchResult, RenderResult, SaveResult, TemplateEngine
from .render.base import Renderer
from .render.registry import RendererRegistry, default_registry
from .templates.base import DocumentTemplate
from .templates.invoice import invoice_template
from .templates.loader import load_template

__all__ = [
    # engine
    "TemplateEngine",
    "RenderResult",
    "SaveResult",
    "BatchResult",
    # templates
    "DocumentTemplate",
    "invoice_template",
    "load_template",
    # structure
    "DocumentStructure",
    "Paragraph",
    "Heading",
    "Table",
    "ListSection",
    "Alignment",
    # render
    "Renderer",
    "RendererRegistry",
    "default_registry",
    # core
    "RenderConfig",
    "load_config",
    "resolve",
    "interpolate",
    "MISSING",
    # errors
    "RenderRejectError",
    "ErrorCodes",
]
