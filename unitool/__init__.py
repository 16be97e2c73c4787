"""Unicode NFKC checking and normalization for text files."""

__version__ = "0.1.0"

from .diff import diff  # noqa: E402
from .errors import InvalidInputError  # noqa: E402
from .models import CharDifference, NormalizationIssue, NormalizeFileResult  # noqa: E402
from .normalize import (  # noqa: E402
    check_line,
    is_equivalent,
    normalize,
    normalize_file,
    to_hex_code_points,
)

__all__ = [
    "CharDifference",
    "InvalidInputError",
    "NormalizationIssue",
    "NormalizeFileResult",
    "check_line",
    "diff",
    "is_equivalent",
    "normalize",
    "normalize_file",
    "to_hex_code_points",
]
