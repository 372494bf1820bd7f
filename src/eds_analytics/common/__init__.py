"""
Common Layer - Shared Utilities
===============================

Helpers used across multiple layers (transport, exchange, orchestration).
"""
