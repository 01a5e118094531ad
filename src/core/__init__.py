"""
Core Layer - Core business logic.

This package contains the core business logic including:
- Configuration management (settings.py)
- Shared types and errors
- Session state transitions
- Trace context
"""

__all__ = []
