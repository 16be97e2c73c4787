"""
Deterministic normalization rules.

This file exists to make the normalization target explicit and enforceable.
"""

NORMALIZATION_FORM = "NFKC"  # compatibility composition
SOURCE_ENCODING = "utf-8-sig"  # UTF-8, leading BOM ignored
TARGET_ENCODING = "utf-8"
LINE_TERMINATOR = "\n"

HEX_DIGITS = 4  # minimum digits per code point in hex renderings
MAX_DISPLAYED_ISSUES = 10
