"""Character-by-character Unicode inspection for comparing two strings."""

from __future__ import annotations

import unicodedata

from .models import CharacterInfo, StringComparison, StringInfo
from .normalize import is_equivalent, normalize, to_hex_code_points


def describe_character(ch: str) -> CharacterInfo:
    code_point = ord(ch)
    return CharacterInfo(
        character=ch,
        code_point=f"U+{code_point:04X}",
        decimal=code_point,
        name=unicodedata.name(ch, ""),
        is_nfc=unicodedata.is_normalized("NFC", ch),
        is_nfkc=unicodedata.is_normalized("NFKC", ch),
    )


def describe_string(text: str) -> StringInfo:
    normalized = normalize(text)
    return StringInfo(
        text=text,
        characters=[describe_character(ch) for ch in text],
        normalized=normalized,
        normalized_hex=to_hex_code_points(normalized),
    )


def compare_strings(first: str, second: str) -> StringComparison:
    """Describe both strings and whether they are equal after NFKC."""
    return StringComparison(
        first=describe_string(first),
        second=describe_string(second),
        equivalent=is_equivalent(first, second),
    )
