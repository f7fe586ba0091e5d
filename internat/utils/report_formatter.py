"""
Utility functions for formatting text-based reports.

Provides consistent section and list formatting for the yearly text report.
"""

import math
from typing import List, Optional


class TextReportBuilder:
    """Builder for plain-text reports with underlined titles."""

    def __init__(self, total_width: int = 40):
        """
        Args:
            total_width: Width of separator lines
        """
        self.total_width = total_width
        self.lines: List[str] = []

    def add_title(self, title: str, char: str = "=") -> "TextReportBuilder":
        """
        Add title followed by an underline of fixed width.

        Returns:
            Self for method chaining
        """
        self.lines.append(title)
        self.lines.append(char * self.total_width)
        return self

    def add_heading(self, heading: str, char: str = "-") -> "TextReportBuilder":
        """
        Add heading underlined to its own length.

        Returns:
            Self for method chaining
        """
        self.lines.append(heading)
        self.lines.append(char * len(heading))
        return self

    def add_separator(self, char: str = "-") -> "TextReportBuilder":
        """
        Add horizontal separator line.

        Returns:
            Self for method chaining
        """
        self.lines.append(char * self.total_width)
        return self

    def add_blank_line(self) -> "TextReportBuilder":
        """
        Add blank line.

        Returns:
            Self for method chaining
        """
        self.lines.append("")
        return self

    def add_text(self, text: str) -> "TextReportBuilder":
        """
        Add arbitrary text line.

        Returns:
            Self for method chaining
        """
        self.lines.append(text)
        return self

    def render(self) -> str:
        """
        Render accumulated lines to string, ending with a newline.

        Returns:
            Formatted report string
        """
        return "\n".join(self.lines) + "\n"


def format_percentage(value: Optional[float], decimal_places: int = 1) -> str:
    """
    Format an already computed percentage.

    Args:
        value: Percentage value, None or NaN when undefined
        decimal_places: Number of decimal places

    Returns:
        Formatted percentage string (e.g., "66.7%"), or "n/a" when undefined
    """
    if value is None or math.isnan(value):
        return "n/a"
    return f"{value:.{decimal_places}f}%"


def format_metric(value: Optional[float], decimal_places: int = 1) -> str:
    """Format a numeric metric for CSV output, "-" when absent or NaN."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "-"
    if decimal_places == 0:
        return str(int(value))
    return f"{value:.{decimal_places}f}"
