"""
エラーハンドリングモジュール

字幕変換システムの例外クラスとエラー処理機能を提供します。
解析処理そのものは例外を送出しないため、ここで定義する例外は
変換ワークフローとファイル操作の層で使用されます。
"""

import logging
import traceback
import datetime
from typing import Dict, Any


class SubtitleConversionError(Exception):
    """字幕変換システムの基底例外クラス"""

    def __init__(self, message: str, error_code: str = None, context: Dict[str, Any] = None):
        """
        初期化

        Args:
            message: エラーメッセージ
            error_code: エラーコード
            context: エラーコンテキスト情報
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.timestamp = datetime.datetime.now()


class SRTParseError(SubtitleConversionError):
    """SRT解析エラー（有効な字幕エントリが1件も無い）"""

    def __init__(self, message: str, skipped_blocks: int = None, file_path: str = None):
        """
        SRT解析エラーの初期化

        Args:
            message: エラーメッセージ
            skipped_blocks: スキップされたブロック数
            file_path: エラーが発生したファイルパス
        """
        context = {}
        if skipped_blocks is not None:
            context['skipped_blocks'] = skipped_blocks
        if file_path:
            context['file_path'] = file_path

        super().__init__(message, "SRT_PARSE_ERROR", context)


class TextParseError(SubtitleConversionError):
    """注釈テキスト解析エラー（有効なエントリが1件も無い）"""

    def __init__(self, message: str, skipped_blocks: int = None, file_path: str = None):
        context = {}
        if skipped_blocks is not None:
            context['skipped_blocks'] = skipped_blocks
        if file_path:
            context['file_path'] = file_path

        super().__init__(message, "TEXT_PARSE_ERROR", context)


class MissingTimecodeError(SubtitleConversionError):
    """タイムコード欠落エラー（自動生成が無効でエントリに時刻が無い）"""

    def __init__(self, message: str, missing_count: int = None):
        """
        タイムコード欠落エラーの初期化

        Args:
            message: エラーメッセージ
            missing_count: 時刻の無いエントリ数
        """
        context = {}
        if missing_count is not None:
            context['missing_count'] = missing_count

        super().__init__(message, "MISSING_TIMECODE", context)


class EmptyInputError(SubtitleConversionError):
    """入力が空の場合のエラー"""

    def __init__(self, message: str, source: str = None):
        context = {}
        if source:
            context['source'] = source

        super().__init__(message, "EMPTY_INPUT", context)


class FileError(SubtitleConversionError):
    """ファイル操作エラー"""

    def __init__(self, message: str, file_path: str = None, operation: str = None):
        """
        ファイル操作エラーの初期化

        Args:
            message: エラーメッセージ
            file_path: 操作対象ファイルパス
            operation: 実行していた操作
        """
        context = {}
        if file_path:
            context['file_path'] = file_path
        if operation:
            context['operation'] = operation

        super().__init__(message, "FILE_ERROR", context)


class ErrorHandler:
    """エラー処理クラス"""

    def __init__(self, logger_name: str = __name__):
        """
        初期化

        Args:
            logger_name: ロガー名
        """
        self.logger = logging.getLogger(logger_name)

    def log_error(self, error: Exception, context: Dict[str, Any] = None) -> None:
        """
        エラーをログに記録

        Args:
            error: ログに記録する例外
            context: 追加のコンテキスト情報
        """
        error_info = {
            'error_type': error.__class__.__name__,
            'error_message': str(error),
            'timestamp': datetime.datetime.now().isoformat(),
        }

        # SubtitleConversionErrorの場合は追加情報を含める
        if isinstance(error, SubtitleConversionError):
            error_info.update({
                'error_code': error.error_code,
                'error_context': error.context,
            })

        if context:
            error_info['additional_context'] = context

        error_info['stack_trace'] = traceback.format_exc()

        # 入力内容に起因するエラーは警告、それ以外はエラーとして記録
        if isinstance(error, FileError):
            self.logger.error(f"重大なエラー: {error_info}")
        elif isinstance(error, SubtitleConversionError):
            self.logger.warning(f"変換エラー: {error_info}")
        else:
            self.logger.error(f"未知のエラー: {error_info}")

    def format_user_message(self, error: Exception) -> str:
        """
        ユーザー向けエラーメッセージ生成

        Args:
            error: フォーマット対象の例外

        Returns:
            str: ユーザー向けのエラーメッセージ
        """
        if isinstance(error, SRTParseError):
            base_message = "有効なSRTファイルではありません。字幕エントリが見つかりませんでした。"
            if 'file_path' in error.context:
                base_message += f" (ファイル: {error.context['file_path']})"
            return base_message

        elif isinstance(error, TextParseError):
            base_message = "テキストから字幕エントリが見つかりませんでした。"
            if 'file_path' in error.context:
                base_message += f" (ファイル: {error.context['file_path']})"
            return base_message

        elif isinstance(error, MissingTimecodeError):
            base_message = "タイムコードの無いエントリがあります。時刻を記入するか、自動生成を有効にしてください。"
            if 'missing_count' in error.context:
                base_message += f" (該当エントリ数: {error.context['missing_count']})"
            return base_message

        elif isinstance(error, EmptyInputError):
            return "変換するテキストを入力してください。"

        elif isinstance(error, FileError):
            base_message = "ファイル操作に失敗しました。"
            if 'file_path' in error.context:
                base_message += f" ファイル: {error.context['file_path']}"
            if 'operation' in error.context:
                base_message += f" (操作: {error.context['operation']})"
            return base_message

        elif isinstance(error, SubtitleConversionError):
            return f"処理中にエラーが発生しました: {error.message}"

        else:
            return f"予期しないエラーが発生しました: {str(error)}"

    def handle_error(self, error: Exception, context: Dict[str, Any] = None) -> str:
        """
        エラーの総合的な処理

        Args:
            error: 処理対象の例外
            context: 追加のコンテキスト情報

        Returns:
            str: ユーザー向けメッセージ
        """
        self.log_error(error, context)
        return self.format_user_message(error)

    @staticmethod
    def create_context(operation: str = None, file_path: str = None, **kwargs) -> Dict[str, Any]:
        """
        コンテキスト情報を作成

        Args:
            operation: 実行中の操作
            file_path: 処理中のファイルパス
            **kwargs: その他の情報

        Returns:
            Dict[str, Any]: コンテキスト辞書
        """
        context = {}

        if operation:
            context['operation'] = operation
        if file_path:
            context['file_path'] = file_path

        context.update(kwargs)

        return context
