"""
Content Normalization.

G2 review bodies interleave the fixed survey questions with the reviewer's
answers. This module strips the questions and folds the answers into a
single paragraph.
"""

from typing import List


# Fragments of the G2 survey questions. Matched case-sensitively as
# substrings of the raw (untrimmed) line.
QUESTION_PATTERNS = (
    "What do you like best about",
    "What do you dislike about",
    "What problems is",
    "solving and how is that benefiting you",
)


def _is_question(line: str) -> bool:
    return any(pattern in line for pattern in QUESTION_PATTERNS)


def format_review_content(content: str) -> str:
    """
    Remove survey questions and blank lines, join the rest with single spaces.

    Args:
        content: Raw review body, possibly multi-line

    Returns:
        One paragraph with no newlines. Idempotent.
    """
    if not content:
        return ""

    kept: List[str] = []
    for line in content.split("\n"):
        if _is_question(line):
            continue
        stripped = line.strip()
        if stripped:
            kept.append(stripped)

    return " ".join(kept)
