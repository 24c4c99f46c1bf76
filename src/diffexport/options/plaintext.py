"""Configuration options for plain text export.

This module defines options for rendering diff lines as plain text.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from diffexport.constants import DEFAULT_COLUMN_WIDTH
from diffexport.options.base import BaseExportOptions


@dataclass(frozen=True)
class PlainTextExportOptions(BaseExportOptions):
    """Configuration options for plain text export.

    Parameters
    ----------
    include_diff_symbols : bool, default True
        Prefix each line with ``+``, ``-``, ``~`` or a space
    column_width : int, default 80
        Width of the separator line between the summary and the diff

    """

    include_diff_symbols: bool = field(
        default=True,
        metadata={"help": "Prefix lines with diff symbols (+/-/~)", "cli_name": "no-diff-symbols"},
    )
    column_width: int = field(
        default=DEFAULT_COLUMN_WIDTH,
        metadata={"help": "Separator width in characters", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``column_width`` is not positive.

        """
        if self.column_width <= 0:
            raise ValueError(f"column_width must be positive, got {self.column_width}")
