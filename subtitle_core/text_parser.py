"""
注釈テキストの解析とSRT生成を行うモジュール

``Time:`` / ``Content:`` などのラベル付き行で構成された注釈テキストを解析し、
SRT形式の文字列を生成する。時刻の無いエントリには一定間隔のタイムコードを補完できる。

対応ラベル（英語と中国語は同義として扱う）::

    Time:         时间:
    Content:      内容:
    Translation:  翻译:
    Original:     原文:
    Subtitle:     字幕:
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .models import ParseResult, TextEntry
from .srt_parser import split_blocks
from .timecode import (
    TIME_RANGE_PATTERN,
    format_timestamp,
    normalize_separator,
    parse_end_time,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

DEFAULT_START_TIME = "00:00:00,000"
DEFAULT_DURATION_PER_ENTRY = 3000


class EntryField(str, Enum):
    """注釈テキストのラベルが設定するフィールド"""
    TIME = "time"
    CONTENT = "content"
    TRANSLATION = "translation"
    ORIGINAL = "original"
    SUBTITLE = "subtitle"


# ラベル → フィールドの対応表（言語を追加する場合は行を追加するだけでよい）
LABELS: Dict[str, EntryField] = {
    "Time:": EntryField.TIME,
    "时间:": EntryField.TIME,
    "时间：": EntryField.TIME,
    "Content:": EntryField.CONTENT,
    "内容:": EntryField.CONTENT,
    "内容：": EntryField.CONTENT,
    "Translation:": EntryField.TRANSLATION,
    "翻译:": EntryField.TRANSLATION,
    "翻译：": EntryField.TRANSLATION,
    "Original:": EntryField.ORIGINAL,
    "原文:": EntryField.ORIGINAL,
    "原文：": EntryField.ORIGINAL,
    "Subtitle:": EntryField.SUBTITLE,
    "字幕:": EntryField.SUBTITLE,
    "字幕：": EntryField.SUBTITLE,
}


def match_label(line: str) -> Tuple[Optional[EntryField], str]:
    """行頭のラベルを判定する

    Returns:
        Tuple[Optional[EntryField], str]: 一致したフィールドとラベルを除いた値。
        一致しない場合は (None, 行全体)
    """
    for label, field in LABELS.items():
        if line.startswith(label):
            return field, line[len(label):].strip()
    return None, line


def _assign_text(fields: Dict[EntryField, str], field: EntryField, value: str) -> bool:
    fields[field] = value
    return True


def _assign_time(fields: Dict[EntryField, str], field: EntryField, value: str) -> bool:
    # 時刻範囲として読めない場合は既存の値を残す
    match = TIME_RANGE_PATTERN.search(value)
    if not match:
        return False
    fields[field] = f"{match.group(1)} --> {match.group(2)}"
    return True


FIELD_SETTERS: Dict[EntryField, Callable[[Dict[EntryField, str], EntryField, str], bool]] = {
    EntryField.TIME: _assign_time,
    EntryField.CONTENT: _assign_text,
    EntryField.TRANSLATION: _assign_text,
    EntryField.ORIGINAL: _assign_text,
    EntryField.SUBTITLE: _assign_text,
}


def parse_text_with_diagnostics(content: str) -> ParseResult[TextEntry]:
    """注釈テキストを解析し、スキップしたブロックの情報と共に返す

    Args:
        content (str): 注釈テキスト

    Returns:
        ParseResult[TextEntry]: テキストエントリと診断情報
    """
    if not isinstance(content, str):
        return ParseResult[TextEntry]()

    blocks = split_blocks(content)
    entries: List[TextEntry] = []
    warnings: List[str] = []

    for block_number, block in enumerate(blocks, 1):
        fields: Dict[EntryField, str] = {}

        for raw_line in block.split('\n'):
            line = raw_line.strip()
            if not line:
                continue

            field, value = match_label(line)

            # ラベルの無い行は最初の1行だけを本文として扱う
            if field is None:
                if not fields.get(EntryField.CONTENT) and not fields.get(EntryField.SUBTITLE):
                    fields[EntryField.CONTENT] = line
                else:
                    warnings.append(f"ラベルの無い行を無視しました（ブロック {block_number}）: {line}")
                continue

            if not FIELD_SETTERS[field](fields, field, value):
                warnings.append(f"時刻形式が不正です（ブロック {block_number}）: {value}")

        if not fields.get(EntryField.SUBTITLE) and not fields.get(EntryField.CONTENT):
            warnings.append(f"本文がありません（ブロック {block_number}）")
            continue

        entries.append(TextEntry(**{field.value: value or None for field, value in fields.items()}))

    skipped = len(blocks) - len(entries)
    if skipped:
        logger.debug(f"テキスト解析: {len(blocks)} ブロック中 {skipped} ブロックをスキップしました")

    return ParseResult[TextEntry](
        entries=entries,
        total_blocks=len(blocks),
        skipped_blocks=skipped,
        warnings=warnings,
    )


def parse_text(content: str) -> List[TextEntry]:
    """注釈テキストを解析してテキストエントリのリストを返す

    Args:
        content (str): 注釈テキスト（convert_to_text の出力、または手書きの同等形式）

    Returns:
        List[TextEntry]: 入力順のテキストエントリ
    """
    return parse_text_with_diagnostics(content).entries


def build_subtitle_text(entry: TextEntry) -> Optional[str]:
    """SRTの字幕本文を組み立てる

    翻訳がある場合は「本文 → 翻訳」、原文がある場合は「原文 → 本文」の順に並べる。
    """
    text = entry.primary_text
    if not text:
        return None

    if entry.translation and entry.translation != text:
        return f"{text}\n{entry.translation}"
    if entry.original and entry.original != text:
        return f"{entry.original}\n{text}"
    return text


def convert_to_srt(entries: Iterable[TextEntry]) -> str:
    """テキストエントリからSRT形式の文字列を生成する

    時刻または本文の無いエントリは出力しない。字幕番号は出力順に1から振り直す。

    Args:
        entries: テキストエントリ

    Returns:
        str: SRT形式の文字列
    """
    srt_lines: List[str] = []
    index = 1

    for entry in entries:
        subtitle_text = build_subtitle_text(entry)
        if not entry.time or not subtitle_text:
            continue

        srt_lines.append(str(index))
        srt_lines.append(normalize_separator(entry.time))
        srt_lines.append(subtitle_text)
        srt_lines.append("")
        index += 1

    return "\n".join(srt_lines).strip()


def generate_time_codes(
    entries: Iterable[TextEntry],
    start_time: str = DEFAULT_START_TIME,
    duration_per_entry: int = DEFAULT_DURATION_PER_ENTRY,
) -> List[TextEntry]:
    """時刻の無いエントリに一定間隔のタイムコードを補完する

    既に時刻を持つエントリがあれば、その終了時刻から続けて補完する。
    入力のエントリは変更せず、新しいリストを返す。

    Args:
        entries: テキストエントリ
        start_time: 最初のエントリの開始時刻
        duration_per_entry: 1エントリあたりの表示時間（ミリ秒）

    Returns:
        List[TextEntry]: 全エントリに時刻が設定されたリスト

    Raises:
        ValueError: duration_per_entry が負の場合
    """
    if duration_per_entry < 0:
        raise ValueError(f"1エントリあたりの時間は0以上である必要があります: {duration_per_entry}")

    current = parse_timestamp(start_time)
    if current is None:
        logger.warning(f"開始時刻を解析できないため 00:00:00,000 から生成します: {start_time!r}")
        current = 0

    result: List[TextEntry] = []
    for entry in entries:
        if not entry.time:
            time_range = f"{format_timestamp(current)} --> {format_timestamp(current + duration_per_entry)}"
            result.append(entry.model_copy(update={"time": time_range}))
            current += duration_per_entry
            continue

        end = parse_end_time(entry.time)
        if end is not None:
            current = end
        result.append(entry)

    return result
