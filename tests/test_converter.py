"""変換ワークフローのテスト."""

import shutil
from pathlib import Path

import pytest

from subtitle_core.config_handler import ConversionConfig
from subtitle_core.converter import SubtitleConverter
from subtitle_core.error_handler import (
    EmptyInputError,
    FileError,
    MissingTimecodeError,
    SRTParseError,
    TextParseError,
)

TEST_DIR = Path(__file__).parent


class TestSRTToText:
    """SRT → テキスト変換のテスト."""

    def setup_method(self):
        self.converter = SubtitleConverter()

    def test_convert_sample(self):
        content = (TEST_DIR / "sample.srt").read_text(encoding="utf-8")
        result = self.converter.srt_to_text(content)

        assert result.entry_count == 3
        assert result.skipped_blocks == 1
        assert result.output.startswith("Time: 00:00:01,000 --> 00:00:04,000\nContent: Hello, world! こんにちは、世界！")
        assert "Translation: こんにちは、世界！" in result.output
        assert "Original: Hello, world!" in result.output

    def test_empty_input(self):
        with pytest.raises(EmptyInputError):
            self.converter.srt_to_text("  \n ")

    def test_no_valid_entries(self):
        with pytest.raises(SRTParseError) as exc_info:
            self.converter.srt_to_text("1\nnot-a-timestamp\n\nhello")

        assert exc_info.value.context["skipped_blocks"] == 2


class TestTextToSRT:
    """テキスト → SRT変換のテスト."""

    def setup_method(self):
        self.converter = SubtitleConverter(ConversionConfig(duration_per_entry_ms=2000))

    def test_auto_generate_time(self):
        result = self.converter.text_to_srt("Subtitle: Hi\n\nSubtitle: There")

        assert result.output == (
            "1\n00:00:00,000 --> 00:00:02,000\nHi\n\n"
            "2\n00:00:02,000 --> 00:00:04,000\nThere"
        )
        assert result.generated_timecodes == 2
        assert result.entry_count == 2

    def test_explicit_parameters_override_config(self):
        result = self.converter.text_to_srt(
            "Subtitle: Hi",
            start_time="00:00:10,000",
            duration_per_entry=500,
        )
        assert result.output == "1\n00:00:10,000 --> 00:00:10,500\nHi"

    def test_missing_time_without_auto_generation(self):
        text = "Time: 00:00:01,000 --> 00:00:02,000\nSubtitle: timed\n\nSubtitle: untimed"

        with pytest.raises(MissingTimecodeError) as exc_info:
            self.converter.text_to_srt(text, auto_generate_time=False)

        assert exc_info.value.context["missing_count"] == 1

    def test_all_timed_without_auto_generation(self):
        text = "Time: 00:00:01.000 --> 00:00:02.000\nSubtitle: timed"
        result = self.converter.text_to_srt(text, auto_generate_time=False)

        assert result.output == "1\n00:00:01,000 --> 00:00:02,000\ntimed"
        assert result.generated_timecodes == 0

    def test_config_disables_auto_generation(self):
        converter = SubtitleConverter(ConversionConfig(auto_generate_time=False))
        with pytest.raises(MissingTimecodeError):
            converter.text_to_srt("Subtitle: untimed")

    def test_empty_input(self):
        with pytest.raises(EmptyInputError):
            self.converter.text_to_srt("")

    def test_no_entries(self):
        with pytest.raises(TextParseError):
            self.converter.text_to_srt("Translation: only a translation")


class TestConvertFile:
    """ファイル変換のテスト."""

    def setup_method(self):
        self.converter = SubtitleConverter()

    def test_srt_file_to_text(self, tmp_path):
        source = tmp_path / "movie.srt"
        shutil.copy(TEST_DIR / "sample.srt", source)

        written = self.converter.convert_file(source)

        assert written == tmp_path / "movie.txt"
        assert written.read_text(encoding="utf-8").startswith("Time: 00:00:01,000")

    def test_text_file_to_srt(self, tmp_path):
        source = tmp_path / "notes.text"
        shutil.copy(TEST_DIR / "sample.txt", source)

        written = self.converter.convert_file(source)

        assert written == tmp_path / "notes.srt"
        output = written.read_text(encoding="utf-8")
        assert output.startswith("1\n00:00:01,000 --> 00:00:03,000\nHello world\n你好世界")
        # 時刻の無いエントリは直前の終了時刻から補完される
        assert "3\n00:00:06,000 --> 00:00:09,000\nNo time given here" in output
        assert "4\n00:00:09,000 --> 00:00:12,000\nJust an unlabeled line" in output

    def test_explicit_output_path(self, tmp_path):
        source = tmp_path / "input.txt"
        source.write_text("Subtitle: Hi", encoding="utf-8")

        written = self.converter.convert_file(source, tmp_path / "out" / "result.srt")

        assert written == tmp_path / "out" / "result.srt"
        assert written.read_text(encoding="utf-8") == "1\n00:00:00,000 --> 00:00:03,000\nHi"

    def test_unsupported_extension(self, tmp_path):
        source = tmp_path / "movie.mp4"
        source.write_bytes(b"\x00\x01")

        with pytest.raises(FileError):
            self.converter.convert_file(source)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileError):
            self.converter.convert_file(tmp_path / "missing.srt")

    def test_invalid_srt_file(self, tmp_path):
        source = tmp_path / "bad.srt"
        source.write_text("this is not a subtitle file", encoding="utf-8")

        with pytest.raises(SRTParseError) as exc_info:
            self.converter.convert_file(source)

        assert exc_info.value.context["file_path"] == str(source)
        assert not (tmp_path / "bad.txt").exists()
