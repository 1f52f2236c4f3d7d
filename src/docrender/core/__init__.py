"""
Core layer: 모든 렌더러가 공유하는 기반 모듈.

역할:
- dotted path 해석 + {{placeholder}} 치환 (paths)
- YAML 렌더 설정 (config)
- 출력 경로 해석 + 원자적 쓰기 (output)
"""

from .config import RenderConfig, load_config
from .output import atomic_write_bytes, resolve_output_path, write_payload
from .paths import MISSING, format_value, interpolate, resolve, resolve_sequence

__all__ = [
    # paths
    "MISSING",
    "resolve",
    "resolve_sequence",
    "interpolate",
    "format_value",
    # config
    "RenderConfig",
    "load_config",
    # output
    "resolve_output_path",
    "atomic_write_bytes",
    "write_payload",
]
