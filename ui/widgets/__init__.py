"""TUI widgets for Magno."""

from .details import DetailsPanel
from .footer import Footer
from .header import Header
from .results import ResultItem, ResultsList

__all__ = ["Header", "ResultsList", "ResultItem", "DetailsPanel", "Footer"]
