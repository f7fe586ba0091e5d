"""
Logical line reconstruction for extracted PDF text.

PDF text extraction breaks one placement record over several physical lines.
A record starts with an ordinal ("12. " or "12 ") and ends with a period, so
physical lines are merged back into logical lines before classification.
"""

from typing import List

from internat.contexts.intake.patterns import ORDINAL_PREFIX_RE, OrdinalPatterns


def starts_with_ordinal(line: str) -> bool:
    """Check if a trimmed line opens a numbered record."""
    return ORDINAL_PREFIX_RE.match(line) is not None


def reconstruct_lines(text: str) -> List[str]:
    """
    Merge physical lines of extracted text into logical lines.

    Rules:
    - A line starting with an ordinal closes the pending logical line and opens a new one.
    - Any other non-empty line is appended to the pending one, space separated.
    - A pending line ending with a period is closed immediately.
    - Whatever is pending at the end of the text is emitted, even unterminated.

    Args:
        text: Raw text with embedded line breaks

    Returns:
        Logical lines in document order
    """
    logical_lines: List[str] = []
    current = ""

    for raw_line in text.splitlines():
        line = raw_line.strip()

        if starts_with_ordinal(line):
            if current:
                logical_lines.append(current)
            current = line
        elif line:
            separator = "" if not current or current.endswith(" ") else " "
            current += separator + line

        if current.endswith(OrdinalPatterns.RECORD_TERMINATOR):
            logical_lines.append(current)
            current = ""

    if current:
        logical_lines.append(current)

    return logical_lines
