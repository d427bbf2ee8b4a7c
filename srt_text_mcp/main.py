#!/usr/bin/env python3
"""
SRT・注釈テキスト変換MCPサーバー
fastmcpを使用したMCPサーバー実装

使用例:
1. SRTを注釈テキストに変換:
   text = srt_to_text(srt_content=content)

2. 注釈テキストをSRTに変換（時刻の無いエントリは自動補完）:
   srt = text_to_srt(
       text_content=text,
       start_time="00:01:00,000",
       duration_per_entry_ms=2000
   )
"""

import logging
from datetime import datetime
from typing import Optional

from fastmcp import FastMCP

from subtitle_core import __version__
from subtitle_core.config_handler import ConfigHandler, ConversionConfig
from subtitle_core.converter import SubtitleConverter
from subtitle_core.error_handler import ErrorHandler, SubtitleConversionError
from subtitle_core.srt_parser import parse_srt_with_diagnostics
from subtitle_core.text_parser import parse_text_with_diagnostics
from subtitle_core.timecode import parse_timestamp

# ログ設定（stdoutはMCPのstdioトランスポートが使用する）
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# 環境変数から設定を読み込み、無効な場合はデフォルト値を使用
config = ConfigHandler().load_from_env() or ConversionConfig()
converter = SubtitleConverter(config)
error_handler = ErrorHandler(__name__)

# FastMCPサーバーインスタンスを作成
mcp = FastMCP(
    "srt-text-converter",
    instructions="SRT字幕と注釈テキスト（Time:/Content:/Translation:/Original:/Subtitle: 形式）を相互変換するMCPサーバー。"
)

# 変換統計を保持
conversion_stats = {
    "srt_to_text": 0,
    "text_to_srt": 0,
    "total_entries": 0,
    "skipped_blocks": 0,
    "generated_timecodes": 0,
    "last_conversion": None,
    "errors": 0
}


def _record(kind: str, entries: int, skipped: int, generated: int = 0) -> None:
    conversion_stats[kind] += 1
    conversion_stats["total_entries"] += entries
    conversion_stats["skipped_blocks"] += skipped
    conversion_stats["generated_timecodes"] += generated
    conversion_stats["last_conversion"] = datetime.now().isoformat()


@mcp.tool(
    description="""SRT字幕テキストを注釈テキストに変換する。

各字幕は次の形式のブロックになります:
   Time: 00:00:01,000 --> 00:00:03,500
   Content: Hello world
   Subtitle: Hello world

注意事項:
- 2行以上の字幕は1行目を Original、2行目を Translation として出力します
- 不正なブロックはスキップされます"""
)
async def srt_to_text(srt_content: str) -> str:
    """
    SRT字幕テキストを注釈テキストに変換する

    Args:
        srt_content: 変換対象のSRT形式テキスト

    Returns:
        str: 注釈テキスト

    Raises:
        ValueError: 有効な字幕エントリが無い場合
    """
    try:
        result = converter.srt_to_text(srt_content)
    except SubtitleConversionError as e:
        conversion_stats["errors"] += 1
        raise ValueError(error_handler.handle_error(e, {"tool": "srt_to_text"})) from e

    _record("srt_to_text", result.entry_count, result.skipped_blocks)
    return result.output


@mcp.tool(
    description="""注釈テキストをSRT字幕に変換する。

対応ラベル: Time:/时间:, Content:/内容:, Translation:/翻译:, Original:/原文:, Subtitle:/字幕:
ラベルの無い行は本文として扱います。

注意事項:
- auto_generate_time が有効な場合、時刻の無いエントリに duration_per_entry_ms ずつ時刻を割り当てます
- 字幕番号は1から振り直されます"""
)
async def text_to_srt(
    text_content: str,
    auto_generate_time: Optional[bool] = None,
    start_time: Optional[str] = None,
    duration_per_entry_ms: Optional[int] = None
) -> str:
    """
    注釈テキストをSRT字幕に変換する

    Args:
        text_content: 変換対象の注釈テキスト
        auto_generate_time: タイムコードを自動生成するか (省略時は環境変数SRT_TEXT_AUTO_TIME)
        start_time: 自動生成の開始時刻 (省略時は環境変数SRT_TEXT_START_TIME)
        duration_per_entry_ms: 1エントリあたりの時間 (省略時は環境変数SRT_TEXT_DURATION_MS)

    Returns:
        str: SRT形式のテキスト

    Raises:
        ValueError: 無効なパラメータ、または変換に失敗した場合
    """
    if start_time is not None and not ConfigHandler().validate_start_time(start_time):
        raise ValueError(f"Invalid start_time: {start_time}. Expected HH:MM:SS,mmm")
    if duration_per_entry_ms is not None and duration_per_entry_ms <= 0:
        raise ValueError(f"duration_per_entry_ms must be positive: {duration_per_entry_ms}")

    try:
        result = converter.text_to_srt(
            text_content,
            auto_generate_time=auto_generate_time,
            start_time=start_time,
            duration_per_entry=duration_per_entry_ms,
        )
    except SubtitleConversionError as e:
        conversion_stats["errors"] += 1
        raise ValueError(error_handler.handle_error(e, {"tool": "text_to_srt"})) from e

    _record("text_to_srt", result.entry_count, result.skipped_blocks, result.generated_timecodes)
    return result.output


@mcp.tool(
    description="""SRTファイルの検証と分析を行う。
    字幕数、スキップされたブロック数、総時間、2行字幕の数などの統計情報を提供します。"""
)
async def analyze_srt(
    srt_content: str,
    detailed: bool = False
) -> dict:
    """
    SRTファイルの内容を分析

    Args:
        srt_content: 分析対象のSRT形式テキスト
        detailed: 詳細分析を行うか

    Returns:
        dict: 分析結果
    """
    parsed = parse_srt_with_diagnostics(srt_content)
    entries = parsed.entries

    if not entries:
        return {
            "valid": False,
            "error": "No valid SRT entries found",
            "subtitle_count": 0,
            "skipped_blocks": parsed.skipped_blocks
        }

    subtitle_count = len(entries)
    total_chars = sum(len(entry.text) for entry in entries)

    first_start = parse_timestamp(entries[0].start_time) or 0
    last_end = parse_timestamp(entries[-1].end_time) or 0
    total_duration = max(0, last_end - first_start) / 1000

    result = {
        "valid": True,
        "subtitle_count": subtitle_count,
        "skipped_blocks": parsed.skipped_blocks,
        "total_characters": total_chars,
        "average_characters": round(total_chars / subtitle_count, 1),
        "bilingual_subtitles": sum(1 for entry in entries if entry.translation),
        "total_duration_seconds": round(total_duration, 2),
        "duration_formatted": f"{int(total_duration // 60)}:{int(total_duration % 60):02d}",
        "first_timestamp": entries[0].start_time,
        "last_timestamp": entries[-1].end_time
    }

    if detailed:
        char_counts = [len(entry.text) for entry in entries]
        durations = [
            (parse_timestamp(entry.end_time) or 0) - (parse_timestamp(entry.start_time) or 0)
            for entry in entries
        ]

        result["detailed_stats"] = {
            "max_characters": max(char_counts),
            "min_characters": min(char_counts),
            "average_duration_ms": round(sum(durations) / len(durations)),
            "non_positive_durations": sum(1 for d in durations if d <= 0),
            "indices_in_sequence": all(
                entry.index == position for position, entry in enumerate(entries, 1)
            )
        }
        result["warnings"] = parsed.warnings

    return result


@mcp.tool(
    description="""注釈テキストの簡易プレビューを生成する。
    最初の数個のエントリを表示し、タイムコードの有無を確認できます。"""
)
async def preview_text(
    text_content: str,
    num_entries: int = 5
) -> dict:
    """
    注釈テキストのプレビューを生成

    Args:
        text_content: プレビュー対象の注釈テキスト
        num_entries: 表示するエントリの数

    Returns:
        dict: プレビュー結果
    """
    parsed = parse_text_with_diagnostics(text_content)
    entries = parsed.entries

    if not entries:
        return {
            "success": False,
            "error": "No valid text entries found",
            "total_entries": 0,
            "skipped_blocks": parsed.skipped_blocks
        }

    preview_entries = []
    for entry in entries[:max(0, num_entries)]:
        preview_entries.append({
            "time": entry.time,
            "text": entry.primary_text,
            "translation": entry.translation,
            "original": entry.original
        })

    return {
        "success": True,
        "total_entries": len(entries),
        "entries_without_time": sum(1 for entry in entries if not entry.time),
        "skipped_blocks": parsed.skipped_blocks,
        "preview_entries": preview_entries
    }


@mcp.tool(
    description="サーバー情報と統計を取得"
)
async def get_server_info() -> dict:
    """
    サーバー情報と統計を取得

    Returns:
        dict: サーバーの名前、バージョン、設定、統計情報
    """
    return {
        "name": "srt-text-converter",
        "version": __version__,
        "description": "SRT subtitle and annotated text conversion MCP server",
        "configuration": {
            "default_start_time": config.default_start_time,
            "duration_per_entry_ms": config.duration_per_entry_ms,
            "auto_generate_time": config.auto_generate_time,
            "max_input_bytes": config.max_input_bytes
        },
        "statistics": conversion_stats,
        "capabilities": [
            "SRT parsing with malformed block skipping",
            "SRT to annotated text conversion",
            "Annotated text to SRT conversion",
            "English and Chinese field labels",
            "Automatic time code generation"
        ]
    }


def main():
    """メインエントリーポイント"""
    # MCPサーバーを起動（stdioトランスポート使用）
    mcp.run()


if __name__ == "__main__":
    main()
