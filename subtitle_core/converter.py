"""
字幕変換ワークフローモジュール

SRT → 注釈テキスト、注釈テキスト → SRT の変換を、入力検証と
エラー報告を含めて実行する。解析関数は空の結果を返すだけなので、
空の結果を「無効なファイル」として扱う判断はこの層で行う。
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .config_handler import ConversionConfig
from .error_handler import (
    EmptyInputError,
    FileError,
    MissingTimecodeError,
    SRTParseError,
    TextParseError,
)
from .file_handler import SubtitleFileHandler
from .srt_parser import convert_to_text, parse_srt_with_diagnostics
from .text_parser import convert_to_srt, generate_time_codes, parse_text_with_diagnostics

logger = logging.getLogger(__name__)


class ConversionResult(BaseModel):
    """Output of a conversion workflow."""

    output: str = Field(..., description="Converted document")
    entry_count: int = Field(0, description="Number of entries written to the output")
    skipped_blocks: int = Field(0, description="Number of input blocks dropped as malformed")
    generated_timecodes: int = Field(0, description="Number of entries given synthesized timing")
    warnings: List[str] = Field(default_factory=list, description="Notes on skipped input")


class SubtitleConverter:
    """SRTと注釈テキストを相互変換するクラス"""

    def __init__(self, config: Optional[ConversionConfig] = None):
        """
        Args:
            config: 変換設定（省略時はデフォルト値）
        """
        self.config = config or ConversionConfig()
        self.file_handler = SubtitleFileHandler(max_input_bytes=self.config.max_input_bytes)

    def srt_to_text(self, srt_content: str, file_path: str = None) -> ConversionResult:
        """SRTテキストを注釈テキストに変換する

        Args:
            srt_content: SRT形式のテキスト
            file_path: エラー報告用の元ファイルパス

        Returns:
            ConversionResult: 変換結果

        Raises:
            EmptyInputError: 入力が空の場合
            SRTParseError: 有効な字幕エントリが1件も無い場合
        """
        if not srt_content or not srt_content.strip():
            raise EmptyInputError("SRTの内容が空です", source=file_path)

        logger.info(f"SRT → テキスト変換を開始します（{len(srt_content)} 文字）")
        parsed = parse_srt_with_diagnostics(srt_content)

        if not parsed.entries:
            raise SRTParseError(
                "有効な字幕エントリが見つかりません",
                skipped_blocks=parsed.skipped_blocks,
                file_path=file_path,
            )
        if parsed.skipped_blocks:
            logger.warning(f"{parsed.skipped_blocks} 個の不正なブロックをスキップしました")

        output = convert_to_text(parsed.entries)
        logger.info(f"SRT → テキスト変換が完了しました（{len(parsed.entries)} エントリ）")

        return ConversionResult(
            output=output,
            entry_count=len(parsed.entries),
            skipped_blocks=parsed.skipped_blocks,
            warnings=parsed.warnings,
        )

    def text_to_srt(
        self,
        text_content: str,
        auto_generate_time: Optional[bool] = None,
        start_time: Optional[str] = None,
        duration_per_entry: Optional[int] = None,
        file_path: str = None,
    ) -> ConversionResult:
        """注釈テキストをSRTに変換する

        Args:
            text_content: 注釈テキスト
            auto_generate_time: 時刻の無いエントリにタイムコードを補完するか（省略時は設定値）
            start_time: 補完の開始時刻（省略時は設定値）
            duration_per_entry: 補完時の1エントリあたりの時間（ミリ秒、省略時は設定値）
            file_path: エラー報告用の元ファイルパス

        Returns:
            ConversionResult: 変換結果

        Raises:
            EmptyInputError: 入力が空の場合
            TextParseError: 有効なエントリが1件も無い場合
            MissingTimecodeError: 自動生成が無効で時刻の無いエントリがある場合
        """
        if auto_generate_time is None:
            auto_generate_time = self.config.auto_generate_time
        if start_time is None:
            start_time = self.config.default_start_time
        if duration_per_entry is None:
            duration_per_entry = self.config.duration_per_entry_ms

        if not text_content or not text_content.strip():
            raise EmptyInputError("テキストの内容が空です", source=file_path)

        logger.info(f"テキスト → SRT変換を開始します（{len(text_content)} 文字）")
        parsed = parse_text_with_diagnostics(text_content)
        entries = parsed.entries

        if not entries:
            raise TextParseError(
                "有効なエントリが見つかりません",
                skipped_blocks=parsed.skipped_blocks,
                file_path=file_path,
            )
        if parsed.skipped_blocks:
            logger.warning(f"{parsed.skipped_blocks} 個の不正なブロックをスキップしました")

        missing = sum(1 for entry in entries if not entry.time)
        if missing and not auto_generate_time:
            raise MissingTimecodeError(
                f"{missing} 個のエントリにタイムコードがありません",
                missing_count=missing,
            )
        if missing:
            logger.info(f"{missing} 個のエントリにタイムコードを生成します（{duration_per_entry}ms/エントリ）")
            entries = generate_time_codes(entries, start_time, duration_per_entry)

        output = convert_to_srt(entries)
        logger.info(f"テキスト → SRT変換が完了しました（{len(entries)} エントリ）")

        return ConversionResult(
            output=output,
            entry_count=len(entries),
            skipped_blocks=parsed.skipped_blocks,
            generated_timecodes=missing,
            warnings=parsed.warnings,
        )

    def convert_file(
        self,
        input_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """ファイルを拡張子に応じて変換し、結果を書き出す

        .srt は注釈テキスト（.txt）に、.txt / .text はSRTに変換する。

        Args:
            input_path: 入力ファイルパス
            output_path: 出力ファイルパス（省略時は拡張子を置き換えたパス）

        Returns:
            Path: 書き出したファイルのパス

        Raises:
            FileError: 対応していない拡張子、または読み書きに失敗した場合
            SubtitleConversionError: 変換に失敗した場合
        """
        input_path = Path(input_path)
        is_srt = self.file_handler.is_srt_file(input_path)
        if not is_srt and not self.file_handler.is_text_file(input_path):
            raise FileError(
                f"対応していないファイル形式です: {input_path.suffix or '(拡張子なし)'}",
                file_path=str(input_path),
                operation="convert",
            )

        target = Path(output_path) if output_path else self.file_handler.derive_output_path(input_path)
        content = self.file_handler.read_text(input_path)

        if is_srt:
            result = self.srt_to_text(content, file_path=str(input_path))
        else:
            result = self.text_to_srt(content, file_path=str(input_path))

        written = self.file_handler.write_text(target, result.output, encoding=self.config.output_encoding)
        logger.info(f"変換結果を書き出しました: {written}")
        return written
