"""
設定管理モジュール

字幕変換システムの設定値を管理し、検証を行います。
"""

import codecs
import os
import logging
from dataclasses import dataclass
from typing import Optional

from .timecode import is_valid_timestamp

DEFAULT_MAX_INPUT_BYTES = 10 * 1024 * 1024

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')


@dataclass
class ConversionConfig:
    """変換設定を格納するデータクラス"""
    default_start_time: str = "00:00:00,000"
    duration_per_entry_ms: int = 3000
    auto_generate_time: bool = True
    max_input_bytes: int = DEFAULT_MAX_INPUT_BYTES
    output_encoding: str = "utf-8"

    def __post_init__(self):
        """初期化後の検証"""
        if self.duration_per_entry_ms <= 0:
            raise ValueError("1エントリあたりの時間は正の整数である必要があります")
        if self.max_input_bytes <= 0:
            raise ValueError("最大入力サイズは正の整数である必要があります")


class ConfigHandler:
    """設定管理クラス"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate_config(self, config: ConversionConfig) -> bool:
        """
        設定値の検証

        Args:
            config: 検証対象の設定

        Returns:
            bool: 検証結果（True: 成功, False: 失敗）
        """
        if not self.validate_start_time(config.default_start_time):
            self.logger.error(f"無効な開始時刻: {config.default_start_time}")
            return False

        if not self.validate_encoding(config.output_encoding):
            self.logger.error(f"無効なエンコーディング: {config.output_encoding}")
            return False

        if config.duration_per_entry_ms <= 0:
            self.logger.error(f"1エントリあたりの時間が無効: {config.duration_per_entry_ms}")
            return False

        if config.max_input_bytes <= 0:
            self.logger.error(f"最大入力サイズが無効: {config.max_input_bytes}")
            return False

        self.logger.info("設定検証が完了しました")
        return True

    def validate_start_time(self, start_time: str) -> bool:
        """
        開始時刻の検証（HH:MM:SS,mmm 形式、分と秒は59以下）

        Args:
            start_time: 検証対象の時刻文字列

        Returns:
            bool: 検証結果
        """
        if not start_time or not isinstance(start_time, str):
            return False
        return is_valid_timestamp(start_time.strip(), strict=True)

    def validate_encoding(self, encoding: str) -> bool:
        """
        エンコーディング名の検証

        Args:
            encoding: 検証対象のエンコーディング名

        Returns:
            bool: 検証結果
        """
        if not encoding or not isinstance(encoding, str):
            return False
        try:
            codecs.lookup(encoding)
        except LookupError:
            return False
        return True

    def parse_bool(self, value: str) -> bool:
        """
        環境変数の真偽値を解釈

        Raises:
            ValueError: 真偽値として解釈できない場合
        """
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ValueError(f"真偽値として解釈できません: {value}")

    def load_from_env(self) -> Optional[ConversionConfig]:
        """
        環境変数から設定を読み込み

        Returns:
            ConversionConfig: 設定オブジェクト（失敗時はNone）
        """
        try:
            config = ConversionConfig(
                default_start_time=os.getenv('SRT_TEXT_START_TIME', '00:00:00,000').strip(),
                duration_per_entry_ms=int(os.getenv('SRT_TEXT_DURATION_MS', '3000')),
                auto_generate_time=self.parse_bool(os.getenv('SRT_TEXT_AUTO_TIME', 'true')),
                max_input_bytes=int(os.getenv('SRT_TEXT_MAX_BYTES', str(DEFAULT_MAX_INPUT_BYTES))),
                output_encoding=os.getenv('SRT_TEXT_OUTPUT_ENCODING', 'utf-8').strip(),
            )
        except ValueError as e:
            self.logger.error(f"環境変数の値が無効: {str(e)}")
            return None

        if self.validate_config(config):
            return config
        return None
