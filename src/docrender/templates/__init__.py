"""
Templates layer: 구조 트리 + 데이터 검증 hook.

역할:
- DocumentTemplate (pre_process → validate → render → post_process)
- YAML 정의 로더 (loader.py)
- invoice 예시 템플릿 (invoice.py)
"""

from .base import DocumentTemplate, Template
from .invoice import invoice_template
from .loader import (
    load_template,
    load_templates,
    template_from_definition,
    validate_template_id,
)

__all__ = [
    "Template",
    "DocumentTemplate",
    "invoice_template",
    "load_template",
    "load_templates",
    "template_from_definition",
    "validate_template_id",
]
