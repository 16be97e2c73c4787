"""
unitool: check and rewrite text files in Unicode NFKC form.

Usage:
  unitool check data.csv
  unitool normalize input.csv output.csv
  unitool compare "⽷" "糸"

Exit codes: 0 = clean / complete / equivalent; 1 = issues found, file not
found or strings differ; 2 = usage error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .compare import compare_strings
from .errors import InvalidInputError
from .models import CharacterInfo, CharDifference, NormalizationIssue, StringInfo
from .normalize import check_file, normalize_file
from .rules import MAX_DISPLAYED_ISSUES

logger = logging.getLogger(__name__)

CHECK = "✓"
CROSS = "✗"


def _mark(flag: bool) -> str:
    return CHECK if flag else CROSS


def _code_point(ch: str) -> str:
    return f"U+{ord(ch):04X}"


# --------------------------------- check ---------------------------------

def _print_difference(difference: CharDifference) -> None:
    print(
        f"  Column: {difference.position:3} "
        f"'{difference.original}' ({_code_point(difference.original)}) → "
        f"'{difference.normalized}' ({_code_point(difference.normalized)})"
    )


def _print_issue(issue: NormalizationIssue) -> None:
    print(f"Line {issue.line_number:4}:")
    for difference in issue.differences:
        _print_difference(difference)
    print()


def _print_issues(issues: List[NormalizationIssue]) -> None:
    if not issues:
        print(f"{CHECK} All text is properly normalized (Form KC)")
        return

    print(f"⚠ Found {len(issues)} line(s) with normalization issues:")
    print()
    for issue in issues[:MAX_DISPLAYED_ISSUES]:
        _print_issue(issue)

    if len(issues) > MAX_DISPLAYED_ISSUES:
        remaining = len(issues) - MAX_DISPLAYED_ISSUES
        print(f"... and {remaining} more issue(s)")


def cmd_check(args: argparse.Namespace) -> int:
    try:
        report = check_file(args.file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.file}")
        return 1

    print(f"Checking file: {args.file}")
    print()
    logger.debug("Checked %d line(s) in %s", report.lines_processed, args.file)

    _print_issues(report.issues)
    for line_number in report.invalid_lines:
        print(f"{CROSS} Line {line_number}: not valid UTF-8 text")

    return 0 if report.clean else 1


# ------------------------------- normalize -------------------------------

def cmd_normalize(args: argparse.Namespace) -> int:
    print(f"Normalizing: {args.input} → {args.output}")

    result = normalize_file(args.input, args.output)
    if result.status == "not_found":
        print(f"Error: File not found: {args.input}")
        return 1
    if result.status == "output_error":
        print(f"Error: Cannot write output: {args.output}")
        return 1

    print(
        f"{CHECK} Complete: {result.lines_processed} lines processed, "
        f"{result.lines_changed} lines normalized"
    )
    for line_number in result.invalid_lines:
        print(f"{CROSS} Line {line_number}: not valid UTF-8 text, copied unchanged")
    return 0


# -------------------------------- compare --------------------------------

def _print_character(info: CharacterInfo) -> None:
    print(f"  Character: '{info.character}' → {info.code_point} (decimal: {info.decimal})")
    print(
        f"    Normalized Form C: {_mark(info.is_nfc)} | "
        f"Normalized Form KC: {_mark(info.is_nfkc)}"
    )


def _print_string(label: str, info: StringInfo) -> None:
    print(f"{label}: '{info.text}'")
    for character in info.characters:
        _print_character(character)
    print()


def cmd_compare(args: argparse.Namespace) -> int:
    try:
        comparison = compare_strings(args.string1, args.string2)
    except InvalidInputError as e:
        print(f"Error: {e}")
        return 1

    print("String Comparison:")
    print("==================")
    print()
    _print_string("String 1", comparison.first)
    _print_string("String 2", comparison.second)

    print("After Form KC Normalization:")
    print(f"  String 1: '{comparison.first.normalized}' (U+{comparison.first.normalized_hex})")
    print(f"  String 2: '{comparison.second.normalized}' (U+{comparison.second.normalized_hex})")
    print()

    if comparison.equivalent:
        print(f"{CHECK} Strings are equivalent after normalization")
        return 0
    print(f"{CROSS} Strings are different even after normalization")
    return 1


# ---------------------------------- main ----------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unitool",
        description="Unicode Normalization Tool (NFKC)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  unitool check data.csv\n"
            "  unitool normalize input.csv output.csv\n"
            '  unitool compare "⽷" "糸"'
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", metavar="command")
    sub.required = True

    p = sub.add_parser("check", help="Check a file for non-normalized text")
    p.add_argument("file", help="UTF-8 text file to check")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("normalize", help="Normalize a file to NFKC form")
    p.add_argument("input", help="UTF-8 text file to read")
    p.add_argument("output", help="File to write the normalized text to")
    p.set_defaults(func=cmd_normalize)

    p = sub.add_parser("compare", help="Compare two strings and show Unicode info")
    p.add_argument("string1")
    p.add_argument("string2")
    p.set_defaults(func=cmd_compare)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print(f"Unicode Normalization Tool Version: {__version__}")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
