"""Excel export for token designs."""

from .token_sheet_renderer import TokenSheetRenderer

__all__ = ["TokenSheetRenderer"]
