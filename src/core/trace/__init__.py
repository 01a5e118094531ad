"""
Trace Module.

This package contains tracing components:
- Trace context
"""

from src.core.trace.trace_context import TraceContext

__all__ = ['TraceContext']
