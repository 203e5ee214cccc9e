"""Collection statistics."""

from memo.analytics.tools import compute_stats

__all__ = ["compute_stats"]
