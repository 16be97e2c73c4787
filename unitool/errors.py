from __future__ import annotations


class InvalidInputError(ValueError):
    """Text handed to the normalizer is not well-formed Unicode."""

    def __init__(self, index: int, code_point: int):
        self.index = index
        self.code_point = code_point
        super().__init__(
            f"unpaired surrogate U+{code_point:04X} at index {index}"
        )


def ensure_well_formed(text: str) -> str:
    """Return ``text`` unchanged, or raise ``InvalidInputError``.

    Python strings can carry lone surrogates (for example bytes decoded with
    ``surrogateescape``); those have no scalar value and cannot be normalized.
    """
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidInputError(e.start, ord(text[e.start])) from None
    return text


class NotUtf8Error(ValueError):
    """Uploaded bytes do not decode as UTF-8."""

    def __init__(self, offset: int, detected: str | None = None):
        self.offset = offset
        self.detected = detected
        message = f"not valid UTF-8 (first bad byte at offset {offset})"
        if detected:
            message += f"; detected encoding: {detected}"
        super().__init__(message)
