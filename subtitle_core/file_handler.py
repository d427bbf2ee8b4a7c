"""
ファイル入出力モジュール

字幕ファイル（.srt）と注釈テキストファイル（.txt / .text）の読み書きと、
文字コードの検出、変換後ファイル名の決定を行う。
"""

import logging
from pathlib import Path
from typing import Union

import chardet

from .config_handler import DEFAULT_MAX_INPUT_BYTES
from .error_handler import FileError

logger = logging.getLogger(__name__)

SRT_EXTENSIONS = ('.srt',)
TEXT_EXTENSIONS = ('.txt', '.text')

_UTF8_BOM = b'\xef\xbb\xbf'


class SubtitleFileHandler:
    """字幕ファイルの読み書きを行うクラス"""

    def __init__(self, max_input_bytes: int = DEFAULT_MAX_INPUT_BYTES):
        """
        Args:
            max_input_bytes (int): 読み込みを許可する最大ファイルサイズ（バイト）
        """
        self.max_input_bytes = max_input_bytes

    def detect_encoding(self, raw_data: bytes) -> str:
        """バイト列のエンコーディングを検出する

        Args:
            raw_data (bytes): ファイルの内容

        Returns:
            str: 検出されたエンコーディング（UTF-8を優先）
        """
        if raw_data.startswith(_UTF8_BOM):
            return 'utf-8-sig'

        # chardetを使用してエンコーディングを検出
        detected = chardet.detect(raw_data)
        encoding = detected['encoding'] if detected['encoding'] else 'utf-8'

        # UTF-8を優先する
        if encoding.lower() in ['ascii', 'utf-8']:
            return 'utf-8'

        return encoding

    def decode(self, raw_data: bytes) -> str:
        """バイト列を検出したエンコーディングで文字列に変換する

        検出結果で復号できない場合はUTF-8で置換文字を使って復号する。
        """
        encoding = self.detect_encoding(raw_data)
        try:
            return raw_data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.warning(f"{encoding} で復号できないため UTF-8 で読み込みます")
            return raw_data.decode('utf-8', errors='replace')

    def read_text(self, file_path: Union[str, Path]) -> str:
        """ファイルを読み込んで文字列を返す

        Args:
            file_path: ファイルパス

        Returns:
            str: ファイルの内容

        Raises:
            FileError: ファイルが存在しない、大きすぎる、または読み込めない場合
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileError(f"ファイルが見つかりません: {path}", file_path=str(path), operation="read")

        size = path.stat().st_size
        if size > self.max_input_bytes:
            raise FileError(
                f"ファイルが大きすぎます（{size} バイト、上限 {self.max_input_bytes} バイト）",
                file_path=str(path),
                operation="read",
            )

        try:
            raw_data = path.read_bytes()
        except OSError as e:
            raise FileError(f"ファイルの読み込みエラー: {e}", file_path=str(path), operation="read") from e

        return self.decode(raw_data)

    def write_text(self, file_path: Union[str, Path], content: str, encoding: str = 'utf-8') -> Path:
        """文字列をファイルに書き込む

        Raises:
            FileError: ファイル書き込みエラーの場合
        """
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding=encoding)
        except (OSError, UnicodeEncodeError) as e:
            raise FileError(f"ファイルの書き込みエラー: {e}", file_path=str(path), operation="write") from e
        return path

    @staticmethod
    def is_srt_file(file_path: Union[str, Path]) -> bool:
        return Path(file_path).suffix.lower() in SRT_EXTENSIONS

    @staticmethod
    def is_text_file(file_path: Union[str, Path]) -> bool:
        return Path(file_path).suffix.lower() in TEXT_EXTENSIONS

    def derive_output_path(self, file_path: Union[str, Path]) -> Path:
        """変換後のファイルパスを決定する（movie.srt → movie.txt, notes.txt → notes.srt）

        Raises:
            FileError: 対応していない拡張子の場合
        """
        path = Path(file_path)
        if self.is_srt_file(path):
            return path.with_suffix('.txt')
        if self.is_text_file(path):
            return path.with_suffix('.srt')
        raise FileError(
            f"対応していないファイル形式です: {path.suffix or '(拡張子なし)'}",
            file_path=str(path),
            operation="convert",
        )
