"""
Packager Module.

This package contains archive packaging components:
- Archive folder tree
- ZIP packager
"""

from src.libs.packager.zip_packager import ArchiveFolder, ZipPackager, split_archive_path

__all__ = [
    "ArchiveFolder",
    "ZipPackager",
    "split_archive_path",
]
