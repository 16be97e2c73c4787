"""
Core normalization logic.

Responsibilities:
- NFKC normalization and equivalence of strings
- hexadecimal code point rendering for diagnostics
- per-line checking (line number + positional diff)
- line-preserving normalization of streams and files
- strict UTF-8 decoding of uploaded bytes, with encoding detection on failure
"""

from __future__ import annotations

import io
import os
import shutil
import tempfile
import unicodedata
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO, Union

from charset_normalizer import from_bytes

from .diff import diff
from .errors import InvalidInputError, NotUtf8Error, ensure_well_formed
from .models import CheckReport, NormalizationIssue, NormalizeFileResult
from .rules import (
    HEX_DIGITS,
    LINE_TERMINATOR,
    NORMALIZATION_FORM,
    SOURCE_ENCODING,
    TARGET_ENCODING,
)

PathLike = Union[str, Path]


def normalize(text: str) -> str:
    """Return ``text`` in compatibility composition form (NFKC).

    Raises ``InvalidInputError`` if ``text`` holds an unpaired surrogate.
    """
    return unicodedata.normalize(NORMALIZATION_FORM, ensure_well_formed(text))


def is_equivalent(a: str, b: str) -> bool:
    return normalize(a) == normalize(b)


def to_hex_code_points(text: str) -> str:
    """Concatenate each code point as zero-padded uppercase hex.

    >>> to_hex_code_points("AB")
    '00410042'
    """
    return "".join(f"{ord(ch):0{HEX_DIGITS}X}" for ch in text)


def check_line(line_number: int, line: str) -> Optional[NormalizationIssue]:
    """Return an issue for ``line`` if normalizing it changes it, else None."""
    normalized = normalize(line)
    if normalized == line:
        return None

    return NormalizationIssue(
        line_number=line_number,
        original_line=line,
        normalized_line=normalized,
        differences=diff(line, normalized),
    )


def iter_lines(stream: TextIO) -> Iterator[str]:
    """Yield the lines of a text stream without their terminators."""
    for line in stream:
        if line.endswith(LINE_TERMINATOR):
            line = line[: -len(LINE_TERMINATOR)]
        yield line


def check_lines(lines: Iterable[str]) -> CheckReport:
    """Check every line, numbering from 1.

    A line that is not valid text is recorded in ``invalid_lines`` and does
    not stop the run.
    """
    report = CheckReport()
    for line_number, line in enumerate(lines, start=1):
        report.lines_processed = line_number
        try:
            issue = check_line(line_number, line)
        except InvalidInputError:
            report.invalid_lines.append(line_number)
            continue
        if issue is not None:
            report.issues.append(issue)
    return report


def _open_source(path: Path) -> TextIO:
    # surrogateescape lets undecodable bytes reach check_line as lone
    # surrogates, where they fail per line instead of per file.
    return path.open("r", encoding=SOURCE_ENCODING, errors="surrogateescape", newline=None)


def check_file(path: PathLike) -> CheckReport:
    source_path = Path(path)
    if not source_path.is_file():
        raise FileNotFoundError(str(path))

    with _open_source(source_path) as source:
        return check_lines(iter_lines(source))


def normalize_stream(source: Iterable[str], target: TextIO) -> NormalizeFileResult:
    """Write the normalized form of each line of ``source`` to ``target``.

    Every input line produces exactly one ``\\n``-terminated output line, in
    order. Lines that cannot be normalized are written back unchanged.
    """
    lines_processed = 0
    lines_changed = 0
    invalid_lines: list[int] = []

    for line_number, line in enumerate(source, start=1):
        lines_processed = line_number
        try:
            normalized = normalize(line)
        except InvalidInputError:
            invalid_lines.append(line_number)
            normalized = line

        if normalized != line:
            lines_changed += 1

        target.write(normalized)
        target.write(LINE_TERMINATOR)

    return NormalizeFileResult(
        lines_changed=lines_changed,
        lines_processed=lines_processed,
        invalid_lines=invalid_lines,
    )


def normalize_file(input_path: PathLike, output_path: PathLike) -> NormalizeFileResult:
    """Normalize ``input_path`` line by line into ``output_path``.

    The output is written to a temporary file beside ``output_path`` and
    moved into place when complete, so a failed run leaves any existing
    output (including the input itself, when normalizing in place) intact.

    Returns ``NormalizeFileResult.not_found()`` without touching the output
    when the input does not exist, and ``NormalizeFileResult.output_error()``
    when the output cannot be written.
    """
    source_path = Path(input_path)
    target_path = Path(output_path)
    if not source_path.is_file():
        return NormalizeFileResult.not_found()

    try:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{target_path.name}.", suffix=".tmp", dir=target_path.parent
        )
    except OSError:
        return NormalizeFileResult.output_error()

    try:
        with _open_source(source_path) as source, os.fdopen(
            fd, "w", encoding=TARGET_ENCODING, errors="surrogateescape", newline=""
        ) as target:
            result = normalize_stream(iter_lines(source), target)
        shutil.copymode(source_path, temp_name)
        os.replace(temp_name, target_path)
    except OSError:
        os.unlink(temp_name)
        return NormalizeFileResult.output_error()
    except BaseException:
        os.unlink(temp_name)
        raise
    return result


def decode_utf8(raw: bytes) -> str:
    """
    Decode uploaded bytes as UTF-8 (a leading BOM is dropped).

    Rules:
    - Input must decode as UTF-8; nothing is transcoded.
    - On failure, detect the likely encoding via charset-normalizer and
      report it in ``NotUtf8Error``.
    """
    try:
        return raw.decode(SOURCE_ENCODING)
    except UnicodeDecodeError as e:
        match = from_bytes(raw).best()
        detected = match.encoding if match is not None else None
        raise NotUtf8Error(e.start, detected) from None


def text_lines(text: str) -> Iterator[str]:
    """Split decoded text into lines the same way files are read."""
    return iter_lines(io.StringIO(text, newline=None))
