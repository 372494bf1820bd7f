"""
Edge Data Store analytics client.

Modules:
- transport: HTTP access to the store (gzip-aware reads, error mapping)
- provisioning: Type and stream lifecycle
- exchange: Typed event I/O and summary parsing
- transformation: Filtering and aggregation
- orchestration: The end-to-end analytics workflow
- config, infrastructure: Settings and structured logging
"""

__version__ = "1.0.0"
