"""
Utilities Module - Shared Helper Functions
===========================================

Provides shared utilities used across multiple layers:
- Date/time utilities
"""

from eds_analytics.common.utils.date_utils import (
    ensure_utc,
    to_iso_instant,
    utc_now,
)

__all__ = [
    "ensure_utc",
    "to_iso_instant",
    "utc_now",
]
