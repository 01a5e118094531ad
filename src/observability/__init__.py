"""
Observability Layer - Logging and tracing.

This package contains observability components:
- Logger and JSON formatter
"""

__all__ = []
