"""
test_output.py - 출력 경로 해석 / 원자적 쓰기 테스트

검증:
- 구분자로 끝나거나 확장자 없는 경로 → 디렉토리 + 파일명
- 확장자 있는 경로 → 그대로 파일
- temp → rename: 실패 시 temp 파일 정리, 기존 파일 보존
"""

import os
from pathlib import Path

import pytest

from docrender.core.output import atomic_write_bytes, resolve_output_path, write_payload

# =============================================================================
# resolve_output_path
# =============================================================================

class TestResolveOutputPath:
    def test_trailing_separator_is_directory(self, tmp_path: Path):
        raw = str(tmp_path / "out") + os.sep
        assert resolve_output_path(raw, "invoice.pdf") == tmp_path / "out" / "invoice.pdf"

    def test_trailing_slash_is_directory(self):
        assert resolve_output_path("output/invoices/", "invoice.csv") == Path(
            "output/invoices/invoice.csv"
        )

    def test_no_extension_is_directory(self, tmp_path: Path):
        target = resolve_output_path(tmp_path / "reports", "invoice.html")
        assert target == tmp_path / "reports" / "invoice.html"

    def test_path_with_extension_is_file(self, tmp_path: Path):
        target = resolve_output_path(tmp_path / "custom.out", "invoice.html")
        assert target == tmp_path / "custom.out"


# =============================================================================
# atomic_write_bytes / write_payload
# =============================================================================

class TestAtomicWrite:
    def test_creates_parent_directories(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "file.bin"

        atomic_write_bytes(target, b"payload")

        assert target.read_bytes() == b"payload"

    def test_overwrites_existing_file(self, tmp_path: Path):
        target = tmp_path / "file.bin"
        target.write_bytes(b"old")

        atomic_write_bytes(target, b"new")

        assert target.read_bytes() == b"new"

    def test_no_temp_files_left(self, tmp_path: Path):
        atomic_write_bytes(tmp_path / "file.bin", b"x")

        assert [p.name for p in tmp_path.iterdir()] == ["file.bin"]

    def test_failed_rename_cleans_up_and_keeps_original(self, tmp_path: Path, monkeypatch):
        target = tmp_path / "file.bin"
        target.write_bytes(b"original")

        def boom(src, dst):
            raise OSError("rename failed")

        monkeypatch.setattr(os, "replace", boom)

        with pytest.raises(OSError, match="rename failed"):
            atomic_write_bytes(target, b"new")

        assert target.read_bytes() == b"original"
        assert [p.name for p in tmp_path.iterdir()] == ["file.bin"]


class TestWritePayload:
    def test_text_is_utf8_encoded(self, tmp_path: Path):
        target = tmp_path / "doc.csv"

        size = write_payload(target, "# 한글, ok\n")

        assert target.read_text(encoding="utf-8") == "# 한글, ok\n"
        assert size == len("# 한글, ok\n".encode("utf-8"))

    def test_bytes_written_verbatim(self, tmp_path: Path):
        target = tmp_path / "doc.pdf"

        size = write_payload(target, b"%PDF-1.4")

        assert target.read_bytes() == b"%PDF-1.4"
        assert size == 8
