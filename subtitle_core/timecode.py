"""
タイムコード変換モジュール

ミリ秒単位の時間と ``HH:MM:SS,mmm`` 形式の表示文字列を相互に変換する。
SRT解析・テキスト解析・タイムコード生成の全てがこのモジュールを共有する。
"""

import re
from typing import Optional, Union

# タイムスタンプの正規表現パターン（区切り文字は , と . の両方を許容、数字はASCIIのみ）
TIMESTAMP = r'[0-9]{2}:[0-9]{2}:[0-9]{2}[,.][0-9]{3}'
TIME_RANGE_PATTERN = re.compile(r'(' + TIMESTAMP + r')\s*-->\s*(' + TIMESTAMP + r')')
END_TIME_PATTERN = re.compile(r'-->\s*(' + TIMESTAMP + r')')

_TIMESTAMP_GROUPS = re.compile(r'([0-9]+):([0-9]+):([0-9]+)[,.]([0-9]+)')
_STRICT_TIMESTAMP = re.compile(r'^([0-9]{2}):([0-9]{2}):([0-9]{2})[,.]([0-9]{3})$')

MS_PER_HOUR = 3600000
MS_PER_MINUTE = 60000
MS_PER_SECOND = 1000


def format_timestamp(milliseconds: Union[int, float]) -> str:
    """ミリ秒を SRT 形式の時刻文字列に変換する

    Args:
        milliseconds: ミリ秒（小数は四捨五入、負の値は0として扱う）

    Returns:
        str: ``HH:MM:SS,mmm`` 形式の文字列
    """
    total = max(0, int(round(milliseconds)))
    hours = total // MS_PER_HOUR
    minutes = (total % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (total % MS_PER_MINUTE) // MS_PER_SECOND
    ms = total % MS_PER_SECOND
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{ms:03d}"


def parse_timestamp(value: str) -> Optional[int]:
    """時刻文字列をミリ秒に変換する

    フィールドの範囲（分が60以上など）は検証しない。

    Args:
        value: ``HH:MM:SS,mmm`` または ``HH:MM:SS.mmm`` 形式の文字列

    Returns:
        Optional[int]: ミリ秒。4つの整数グループが取り出せない場合はNone
    """
    if not isinstance(value, str):
        return None

    match = _TIMESTAMP_GROUPS.fullmatch(value.strip())
    if not match:
        return None

    hours, minutes, seconds, ms = map(int, match.groups())
    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + ms


def parse_end_time(time_range: str) -> Optional[int]:
    """``<start> --> <end>`` 形式の文字列から終了時刻をミリ秒で取り出す"""
    match = END_TIME_PATTERN.search(time_range or '')
    if not match:
        return None
    return parse_timestamp(match.group(1))


def normalize_separator(value: str) -> str:
    """小数点区切りをSRTが要求するカンマに統一する"""
    return value.replace('.', ',')


def is_valid_timestamp(value: str, strict: bool = False) -> bool:
    """時刻形式が正しいかを検証する

    Args:
        value: 時刻文字列
        strict: Trueの場合、分と秒の範囲（0-59）もチェックする

    Returns:
        bool: 形式が正しい場合はTrue
    """
    match = _STRICT_TIMESTAMP.match(value or '')
    if not match:
        return False

    if strict:
        _, minutes, seconds, _ = map(int, match.groups())
        if minutes > 59 or seconds > 59:
            return False

    return True


def seconds_to_timestamp(seconds: float) -> str:
    """秒（浮動小数点）を SRT 形式に変換する（ミリ秒は切り捨て）"""
    seconds = max(0.0, float(seconds))
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    ms = int((seconds % 1) * 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{ms:03d}"
