"""
Path resolver / interpolator.

규칙:
- resolve(): dotted path로 중첩 mapping 탐색, 실패 시 MISSING 반환 (예외 없음)
- interpolate(): {{path}} 치환, 해석 불가 placeholder는 원문 그대로 유지
- 0, "", False 는 "존재하는 값" → 반드시 출력 (truthiness 판정 금지)
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from docrender.domain.constants import PATH_SEPARATOR, PLACEHOLDER_PATTERN


class _Missing:
    """해석 불가 경로 sentinel. None은 실제 저장 가능한 값이므로 구분."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def resolve(path: str, data: Any) -> Any:
    """
    dotted path 해석.

    Args:
        path: "customer.address.city" 형태
        data: 데이터 레코드

    Returns:
        해석된 값, 중간 경로가 없거나 mapping이 아니면 MISSING
    """
    current = data
    for key in path.split(PATH_SEPARATOR):
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]
    return current


def resolve_sequence(path: str, data: Any) -> list[Any]:
    """
    data_key → row/item 목록.

    sequence가 아니면 (없음, 문자열, mapping 등) 빈 목록.
    """
    value = resolve(path, data)
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return []
    return list(value)


def format_value(value: Any) -> str:
    """
    출력용 문자열 변환.

    - None → ""
    - bool → "true" / "false"
    - 정수값 float → 정수 표기 (255.0 → "255")
    - Decimal → str 그대로 (정밀도 보존)
    """
    if value is None or value is MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def interpolate(text: str, data: Any) -> str:
    """
    {{path}} placeholder 치환.

    Args:
        text: 템플릿 문자열
        data: 데이터 레코드

    Returns:
        치환된 문자열 (해석 불가 placeholder는 원문 유지)
    """

    def _replace(match: re.Match[str]) -> str:
        value = resolve(match.group(1), data)
        if value is MISSING:
            return match.group(0)
        return format_value(value)

    return PLACEHOLDER_PATTERN.sub(_replace, text)


def find_placeholders(text: str) -> list[str]:
    """
    템플릿 문자열에서 placeholder 경로 목록 추출 (등장 순서, 중복 제거).

    Returns:
        placeholder 경로 목록 (예: ["invoiceNumber", "customer.name"])
    """
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)
