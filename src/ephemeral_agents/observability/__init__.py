"""Logging and observability.

Exports:
- SensitiveDataFilter, StructuredFormatter, setup_logging
"""

from ephemeral_agents.observability.logging import (
    SensitiveDataFilter,
    StructuredFormatter,
    setup_logging,
)

__all__ = [
    "SensitiveDataFilter",
    "StructuredFormatter",
    "setup_logging",
]
