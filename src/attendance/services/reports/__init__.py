"""Period report service exports."""

from .summary import summarize_by_period

__all__ = ["summarize_by_period"]
