"""
SRTファイルの解析と生成を行うモジュール

このモジュールはSRT (SubRip) 形式の字幕テキストを解析して字幕エントリに変換し、
ラベル付きの注釈テキスト形式、または再びSRT形式で出力する機能を提供する。
不正なブロックは例外を送出せずにスキップする。
"""

import html
import logging
import re
from typing import Iterable, List, Optional

from .models import Cue, ParseResult, SubtitleEntry
from .timecode import TIME_RANGE_PATTERN, seconds_to_timestamp

logger = logging.getLogger(__name__)

# 字幕ブロックの区切り（空白のみの行も空行として扱う）
BLOCK_SEPARATOR = re.compile(r'\n\s*\n')
INDEX_PATTERN = re.compile(r'\s*([+-]?[0-9]+)')
HTML_TAG_PATTERN = re.compile(r'<[^>]*>')
WHITESPACE_PATTERN = re.compile(r'\s+')


def split_blocks(content: str) -> List[str]:
    """テキストを空行区切りのブロックに分割する（先頭のBOMは取り除く）"""
    content = content.replace('\r\n', '\n').replace('\r', '\n').strip().lstrip('\ufeff').strip()
    if not content:
        return []
    return [block.strip() for block in BLOCK_SEPARATOR.split(content) if block.strip()]


def _parse_index(line: str) -> Optional[int]:
    """字幕番号を先頭の整数部分から読み取る（"12 " や "3a" も受け付ける）"""
    match = INDEX_PATTERN.match(line)
    if not match:
        return None
    return int(match.group(1))


def parse_srt_with_diagnostics(content: str) -> ParseResult[SubtitleEntry]:
    """SRTテキストを解析し、スキップしたブロックの情報と共に返す

    Args:
        content (str): SRT形式のテキスト

    Returns:
        ParseResult[SubtitleEntry]: 字幕エントリと診断情報
    """
    if not isinstance(content, str):
        return ParseResult[SubtitleEntry]()

    blocks = split_blocks(content)
    entries: List[SubtitleEntry] = []
    warnings: List[str] = []

    for block_number, block in enumerate(blocks, 1):
        lines = block.split('\n')

        if len(lines) < 3:
            warnings.append(f"行数が不足しています（ブロック {block_number}）")
            continue

        # 1行目: 字幕番号
        index = _parse_index(lines[0])
        if index is None:
            warnings.append(f"字幕番号が不正です（ブロック {block_number}）: {lines[0].strip()}")
            continue

        # 2行目: タイムスタンプ
        time_match = TIME_RANGE_PATTERN.search(lines[1])
        if not time_match:
            warnings.append(f"タイムスタンプ形式が不正です（ブロック {block_number}）: {lines[1].strip()}")
            continue

        start_time, end_time = time_match.groups()

        # 3行目以降: 字幕テキスト
        text_lines = [line.strip() for line in lines[2:]]
        if len(text_lines) > 1:
            text = ' '.join(text_lines)
            original = text_lines[0] or None
            translation = text_lines[1] or None
        else:
            text = text_lines[0]
            original = None
            translation = None

        if not text.strip():
            warnings.append(f"字幕テキストが空です（ブロック {block_number}）")
            continue

        entries.append(SubtitleEntry(
            index=index,
            start_time=start_time,
            end_time=end_time,
            text=text,
            original=original,
            translation=translation,
        ))

    skipped = len(blocks) - len(entries)
    if skipped:
        logger.debug(f"SRT解析: {len(blocks)} ブロック中 {skipped} ブロックをスキップしました")

    return ParseResult[SubtitleEntry](
        entries=entries,
        total_blocks=len(blocks),
        skipped_blocks=skipped,
        warnings=warnings,
    )


def parse_srt(content: str) -> List[SubtitleEntry]:
    """SRTテキストを解析して字幕エントリのリストを返す

    不正なブロックは黙って読み飛ばす。空の入力や全て不正な入力の場合は空のリストを返す。

    Args:
        content (str): SRT形式のテキスト

    Returns:
        List[SubtitleEntry]: 入力順の字幕エントリ
    """
    return parse_srt_with_diagnostics(content).entries


def convert_to_text(entries: Iterable[SubtitleEntry]) -> str:
    """字幕エントリをラベル付きの注釈テキストに変換する

    Args:
        entries: 字幕エントリ

    Returns:
        str: 注釈テキスト（エントリが無い場合は空文字列）
    """
    lines: List[str] = []

    for entry in entries:
        lines.append(f"Time: {entry.time_range}")
        lines.append(f"Content: {entry.text}")
        if entry.translation:
            lines.append(f"Translation: {entry.translation}")
        if entry.original and entry.original != entry.text:
            lines.append(f"Original: {entry.original}")
        lines.append(f"Subtitle: {entry.text}")
        lines.append("")

    return "\n".join(lines).strip()


def clean_cue_text(text: str) -> str:
    """キューのテキストからHTMLタグを除去し、空白を正規化する"""
    text = HTML_TAG_PATTERN.sub('', text or '')
    text = text.replace('&nbsp;', ' ')
    text = html.unescape(text)
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def cues_to_srt(cues: Iterable[Cue]) -> str:
    """秒単位のキューのリストからSRT形式の文字列を生成する

    重複するキューを除き、開始時刻順に並べ替え、テキストが空のキューは出力しない。

    Args:
        cues: 字幕キュー

    Returns:
        str: SRT形式の文字列
    """
    unique: List[Cue] = []
    seen = set()
    for cue in cues:
        key = (cue.start, cue.end, cue.text)
        if key in seen:
            continue
        seen.add(key)
        unique.append(cue)

    srt_lines: List[str] = []
    index = 1
    for cue in sorted(unique, key=lambda c: c.start):
        text = clean_cue_text(cue.text)
        if not text:
            continue

        srt_lines.append(str(index))
        srt_lines.append(f"{seconds_to_timestamp(cue.start)} --> {seconds_to_timestamp(cue.end)}")
        srt_lines.append(text)
        srt_lines.append("")
        index += 1

    return "\n".join(srt_lines).strip()
