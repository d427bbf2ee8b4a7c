"""ファイル入出力モジュールのテスト."""

from pathlib import Path

import pytest

from subtitle_core.error_handler import FileError
from subtitle_core.file_handler import SubtitleFileHandler


class TestSubtitleFileHandler:
    """SubtitleFileHandlerのテスト."""

    def setup_method(self):
        self.handler = SubtitleFileHandler(max_input_bytes=1024)

    def test_detect_encoding_prefers_utf8(self):
        assert self.handler.detect_encoding(b"plain ascii text") == "utf-8"
        assert self.handler.detect_encoding("字幕のテストです。日本語を含みます。".encode("utf-8")) == "utf-8"

    def test_detect_encoding_bom(self):
        assert self.handler.detect_encoding(b"\xef\xbb\xbf1\n") == "utf-8-sig"

    def test_decode_strips_bom(self):
        assert self.handler.decode(b"\xef\xbb\xbfSubtitle: Hi") == "Subtitle: Hi"

    def test_read_text(self, tmp_path):
        path = tmp_path / "sample.srt"
        path.write_text("1\n00:00:01,000 --> 00:00:02,000\n你好，世界。这是中文字幕。\n", encoding="utf-8")

        assert "你好，世界。" in self.handler.read_text(path)

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileError) as exc_info:
            self.handler.read_text(tmp_path / "missing.srt")

        assert exc_info.value.context["operation"] == "read"

    def test_read_oversized_file(self, tmp_path):
        path = tmp_path / "large.txt"
        path.write_bytes(b"a" * 2048)

        with pytest.raises(FileError):
            self.handler.read_text(path)

    def test_write_text_creates_parent(self, tmp_path):
        path = self.handler.write_text(tmp_path / "nested" / "out.srt", "content")

        assert path.read_text(encoding="utf-8") == "content"

    def test_write_text_encoding_error(self, tmp_path):
        with pytest.raises(FileError) as exc_info:
            self.handler.write_text(tmp_path / "out.txt", "字幕", encoding="ascii")

        assert exc_info.value.context["operation"] == "write"

    @pytest.mark.parametrize("name,expected", [
        ("movie.srt", "movie.txt"),
        ("MOVIE.SRT", "MOVIE.txt"),
        ("notes.txt", "notes.srt"),
        ("notes.text", "notes.srt"),
    ])
    def test_derive_output_path(self, name, expected):
        assert self.handler.derive_output_path(Path("/data") / name) == Path("/data") / expected

    def test_derive_output_path_unsupported(self):
        with pytest.raises(FileError):
            self.handler.derive_output_path("clip.vtt")

    def test_file_type_checks(self):
        assert SubtitleFileHandler.is_srt_file("a.srt")
        assert not SubtitleFileHandler.is_srt_file("a.txt")
        assert SubtitleFileHandler.is_text_file("a.TEXT")
        assert not SubtitleFileHandler.is_text_file("a.ass")
