"""
SRT・注釈テキスト変換 - コアパッケージ

SRT解析、注釈テキスト解析、タイムコード生成と、設定管理・エラーハンドリング機能を提供します。
"""

from .config_handler import ConversionConfig, ConfigHandler
from .converter import ConversionResult, SubtitleConverter
from .error_handler import (
    SubtitleConversionError,
    SRTParseError,
    TextParseError,
    MissingTimecodeError,
    EmptyInputError,
    FileError,
    ErrorHandler
)
from .models import Cue, ParseResult, SubtitleEntry, TextEntry
from .srt_parser import convert_to_text, cues_to_srt, parse_srt, parse_srt_with_diagnostics
from .text_parser import convert_to_srt, generate_time_codes, parse_text, parse_text_with_diagnostics
from .timecode import format_timestamp, parse_timestamp

__all__ = [
    'ConversionConfig',
    'ConfigHandler',
    'ConversionResult',
    'SubtitleConverter',
    'SubtitleConversionError',
    'SRTParseError',
    'TextParseError',
    'MissingTimecodeError',
    'EmptyInputError',
    'FileError',
    'ErrorHandler',
    'Cue',
    'ParseResult',
    'SubtitleEntry',
    'TextEntry',
    'parse_srt',
    'parse_srt_with_diagnostics',
    'convert_to_text',
    'cues_to_srt',
    'parse_text',
    'parse_text_with_diagnostics',
    'convert_to_srt',
    'generate_time_codes',
    'format_timestamp',
    'parse_timestamp',
]

__version__ = "1.0.0"
