"""Utility functions for the Acme dashboard."""

from .activity import log_activity
from .view_cache import INVOICES_PATH, revalidate_path

__all__ = [
    "log_activity",
    "INVOICES_PATH",
    "revalidate_path",
]
