"""
Rendering orchestrator: 렌더 → (선택) 저장, 다중 포맷 일괄 처리.

흐름:
    registry.get(format) → template.render(renderer, data) → 파일명 결정 → 저장

다중 포맷 (render_and_save):
- 포맷당 작업 1개를 thread pool 로 동시 실행, 결과는 입력 순서대로
- 실패 정책: 배치 실패. 모든 작업 종료를 기다린 뒤 입력 순서상 첫 실패를 그대로 raise
  (부분 성공 목록을 반환하지 않음, 이미 저장된 형제 포맷 파일은 남겨두고 로그)
"""

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docrender.core.output import resolve_output_path, write_payload
from docrender.render.registry import RendererRegistry, default_registry
from docrender.templates.base import Template

logger = logging.getLogger(__name__)


# =============================================================================
# Results
# =============================================================================

@dataclass
class RenderResult:
    """렌더 결과 (메모리)."""
    content: str | bytes
    content_type: str
    file_name: str

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용 (content 제외)."""
        return {
            "content_type": self.content_type,
            "file_name": self.file_name,
            "length": len(self.content),
        }


@dataclass
class SaveResult:
    """저장 결과."""
    file_path: Path  # 절대 경로
    file_name: str
    size: int  # bytes

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": str(self.file_path),
            "file_name": self.file_name,
            "size": self.size,
        }


@dataclass
class BatchResult:
    """다중 포맷 저장 결과 (포맷 1개분)."""
    format: str
    file_path: Path
    file_name: str
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "file_path": str(self.file_path),
            "file_name": self.file_name,
            "size": self.size,
        }


# =============================================================================
# Engine
# =============================================================================

class TemplateEngine:
    """
    템플릿 렌더링 오케스트레이터.

    Usage:
        engine = TemplateEngine()
        result = engine.render(invoice_template(), data, "pdf")
        engine.render_and_save(invoice_template(), data, ["html", "csv", "pdf"], "out/")
    """

    def __init__(
        self,
        registry: RendererRegistry | None = None,
        max_workers: int | None = None,
    ):
        """
        Args:
            registry: 렌더러 registry (None이면 default_registry())
            max_workers: 일괄 처리 thread 수 상한 (None이면 포맷 수)
        """
        self.registry = registry or default_registry()
        self.max_workers = max_workers

    def render(
        self,
        template: Template,
        data: Mapping[str, Any] | None,
        format: str,
        file_name: str | None = None,
    ) -> RenderResult:
        """
        메모리 렌더.

        Args:
            template: 템플릿
            data: 데이터 레코드
            format: 포맷 ID (대소문자 무시)
            file_name: 출력 파일명 (None이면 "{template 이름}.{확장자}")

        Returns:
            RenderResult

        Raises:
            RenderRejectError: UNSUPPORTED_FORMAT, 검증 실패, RENDER_FAILED
        """
        renderer = self.registry.get(format)
        logger.debug(f"Rendering '{template.get_name()}' as {format} with {type(renderer).__name__}")

        content = template.render(renderer, data)
        name = file_name or f"{template.get_name()}.{renderer.file_extension()}"

        result = RenderResult(
            content=content,
            content_type=renderer.content_type(),
            file_name=name,
        )
        logger.debug(f"Rendered {result.to_dict()}")
        return result

    def save(
        self,
        template: Template,
        data: Mapping[str, Any] | None,
        format: str,
        output_path: str | Path,
        file_name: str | None = None,
    ) -> SaveResult:
        """
        렌더 후 파일 저장.

        Args:
            output_path: 파일 경로, 또는 디렉토리 (구분자로 끝나거나 확장자 없음)

        Returns:
            SaveResult (절대 경로, 파일명, 크기)

        Raises:
            RenderRejectError: render() 참조
            OSError: 디렉토리 생성/쓰기 실패 (그대로 전파)
        """
        result = self.render(template, data, format, file_name)

        target = resolve_output_path(output_path, result.file_name)
        size = write_payload(target, result.content)
        file_path = target.resolve()

        saved = SaveResult(file_path=file_path, file_name=result.file_name, size=size)
        logger.info(f"Saved {format} output: {saved.to_dict()}")
        return saved

    def render_and_save(
        self,
        template: Template,
        data: Mapping[str, Any] | None,
        formats: Sequence[str],
        output_path: str | Path,
    ) -> list[BatchResult]:
        """
        다중 포맷 동시 렌더 + 저장.

        Args:
            formats: 포맷 ID 목록
            output_path: 출력 디렉토리 (또는 파일 경로)

        Returns:
            포맷별 BatchResult (입력 순서)

        Raises:
            RenderRejectError: 미지원 포맷 (작업 시작 전), 또는 첫 번째 실패 포맷의 에러
            OSError: 첫 번째 실패 포맷의 I/O 에러
        """
        if not formats:
            return []

        # 미지원 포맷은 작업 시작 전에 fail-fast
        for fmt in formats:
            self.registry.get(fmt)

        workers = min(len(formats), self.max_workers or len(formats))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="docrender") as pool:
            futures = [
                pool.submit(self.save, template, data, fmt, output_path)
                for fmt in formats
            ]

        results: list[BatchResult] = []
        failures: list[tuple[str, BaseException]] = []
        for fmt, future in zip(formats, futures):
            error = future.exception()
            if error is not None:
                logger.error(f"Batch render failed for format '{fmt}': {error}")
                failures.append((fmt, error))
                continue
            saved = future.result()
            results.append(
                BatchResult(
                    format=fmt,
                    file_path=saved.file_path,
                    file_name=saved.file_name,
                    size=saved.size,
                )
            )

        if failures:
            if results:
                logger.warning(
                    "Batch incomplete; files already written: "
                    f"{[r.to_dict() for r in results]}"
                )
            raise failures[0][1]

        return results
