"""
Output writing: 출력 경로 해석 + 원자적 파일 쓰기.

경로 규칙:
- 구분자로 끝나는 경로, 또는 확장자가 없는 경로 → 디렉토리로 간주, 파일명 추가
- 그 외 → 경로 그대로 파일로 사용

쓰기 규칙:
- temp → rename (중간 상태 없음, 크래시 시 부분 파일 남지 않음)
- 디렉토리 생성은 idempotent (동시 저장 경합 안전)
- OSError는 감싸지 않고 호출자에게 전파
"""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def resolve_output_path(output_path: str | Path, file_name: str) -> Path:
    """
    최종 출력 파일 경로 결정.

    Args:
        output_path: 파일 또는 디렉토리 경로
        file_name: 디렉토리일 때 붙일 파일명

    Returns:
        출력 파일 경로
    """
    raw = os.fspath(output_path)
    is_dir_like = (
        raw.endswith(os.sep)
        or raw.endswith("/")
        or not Path(raw).suffix
    )
    if is_dir_like:
        return Path(raw) / file_name
    return Path(raw)


def atomic_write_bytes(path: Path, content: bytes) -> None:
    """
    원자적 바이너리 쓰기.

    Args:
        path: 저장할 파일 경로 (부모 디렉토리는 자동 생성)
        content: 저장할 바이트
    """
    dir_path = path.parent
    dir_path.mkdir(parents=True, exist_ok=True)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=dir_path,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            temp_path = Path(f.name)
            f.write(content)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError as e:
                logger.warning(
                    f"File fsync failed for {path}: {e}. "
                    f"Data may not be durable on power loss."
                )

        os.replace(temp_path, path)

    except Exception:
        # 실패 시 temp 파일 정리
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                logger.warning(f"Failed to remove temp file {temp_path}")
        raise


def write_payload(path: Path, content: str | bytes) -> int:
    """
    렌더 결과 저장.

    Args:
        path: 출력 파일 경로
        content: 텍스트(UTF-8 인코딩) 또는 바이트

    Returns:
        저장된 파일 크기 (bytes)
    """
    payload = content.encode("utf-8") if isinstance(content, str) else content
    atomic_write_bytes(path, payload)
    return path.stat().st_size
