"""
Splitter Module.

This package contains text splitter abstractions and implementations:
- Base splitter class
- Splitter factory
- Delimiter splitter (``### path/to/file`` headers)
"""

from src.libs.splitter.base_splitter import BaseSplitter
from src.libs.splitter.delimiter_splitter import DelimiterSplitter, HeaderMatch, iter_header_matches, split
from src.libs.splitter.splitter_factory import SplitterFactory

__all__ = [
    "BaseSplitter",
    "DelimiterSplitter",
    "HeaderMatch",
    "SplitterFactory",
    "iter_header_matches",
    "split",
]
