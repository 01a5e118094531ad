"""
UI Layer - Streamlit front end.

This package contains the browser UI:
- App entry point and navigation
- Code Splitter page
- Format Guide page
"""

__all__ = []
