"""ZIP packaging for split file records.

Records are first arranged in an in-memory :class:`ArchiveFolder` tree
(directories are get-or-create, so shared prefixes yield one directory)
and the tree is then serialised with :mod:`zipfile`.
"""

from __future__ import annotations

import asyncio
import io
import time
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, Optional, Tuple

from src.core.errors import PackagingError
from src.core.settings import DEFAULT_ARCHIVE_NAME
from src.core.types import FileRecord
from src.observability.logger import get_logger

if TYPE_CHECKING:
    from src.core.settings import Settings
    from src.core.trace.trace_context import TraceContext

logger = get_logger(__name__)

_COMPRESSION = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}


@dataclass
class ArchiveFolder:
    """A directory node of the archive tree.

    Attributes:
        name: Directory name (empty for the archive root).
        folders: Child directories in creation order.
        files: File name → content in insertion order.
    """

    name: str = ""
    folders: Dict[str, "ArchiveFolder"] = field(default_factory=dict)
    files: Dict[str, str] = field(default_factory=dict)

    def folder(self, name: str) -> "ArchiveFolder":
        """Return the child directory *name*, creating it on first use."""
        if name in self.files:
            raise PackagingError(f"'{name}' is both a file and a directory")
        child = self.folders.get(name)
        if child is None:
            child = ArchiveFolder(name=name)
            self.folders[name] = child
        return child

    def file(self, name: str, content: str) -> None:
        """Add file *name*; an existing file of the same name is replaced."""
        if name in self.folders:
            raise PackagingError(f"'{name}' is both a file and a directory")
        self.files[name] = content

    def walk(self, prefix: str = "") -> Iterator[Tuple[str, Optional[str]]]:
        """Yield ``(archive_path, content)`` pairs, depth first.

        Directories are yielded with a trailing ``/`` and ``None`` content,
        before anything they contain.
        """
        for name, content in self.files.items():
            yield f"{prefix}{name}", content
        for name, child in self.folders.items():
            child_prefix = f"{prefix}{name}/"
            yield child_prefix, None
            yield from child.walk(child_prefix)


def split_archive_path(path: str) -> Tuple[list[str], str]:
    """Split a record path into its directory chain and leaf file name.

    Empty and ``.`` segments are dropped, except in the last position:
    the leaf must be a real file name.

    Raises:
        PackagingError: On ``..`` segments or a path without a file name.
    """
    parts = [part for part in path.split("/") if part not in ("", ".")]
    if ".." in parts:
        raise PackagingError(f"Path escapes the archive root: {path}")
    if not parts or path.rsplit("/", 1)[-1] in ("", "."):
        raise PackagingError(f"Path has no file name: {path}")
    return parts[:-1], parts[-1]


class ZipPackager:
    """Build ZIP archives from ordered file records."""

    def __init__(
        self,
        compression: str = "deflated",
        archive_name: str = DEFAULT_ARCHIVE_NAME,
    ) -> None:
        if compression not in _COMPRESSION:
            available = ", ".join(sorted(_COMPRESSION))
            raise ValueError(f"Unsupported compression: {compression}. Available: {available}")
        self.compression = compression
        self.archive_name = archive_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "ZipPackager":
        return cls(
            compression=str(settings.archive.get("compression", "deflated")),
            archive_name=settings.archive_name,
        )

    def build_tree(self, records: Iterable[FileRecord]) -> ArchiveFolder:
        """Arrange *records* into a directory tree (last duplicate wins)."""
        root = ArchiveFolder()
        for record in records:
            directories, file_name = split_archive_path(record.path)
            current = root
            for directory in directories:
                current = current.folder(directory)
            if file_name in current.files:
                logger.warning("Duplicate path %s: later content replaces earlier", record.path)
            current.file(file_name, record.content)
        return root

    def package(
        self,
        records: Iterable[FileRecord],
        trace: TraceContext | None = None,
    ) -> bytes:
        """Serialise *records* into ZIP bytes.

        Raises:
            PackagingError: If there is nothing to package, a path is not
                usable as an archive entry, or serialisation fails.
        """
        records = list(records)
        if not records:
            raise PackagingError("No files to package")

        start = time.monotonic()
        root = self.build_tree(records)
        compress_type = _COMPRESSION[self.compression]
        timestamp = time.localtime()[:6]

        buffer = io.BytesIO()
        entry_count = 0
        try:
            with zipfile.ZipFile(buffer, "w", compression=compress_type) as archive:
                for name, content in root.walk():
                    info = zipfile.ZipInfo(name, date_time=timestamp)
                    if content is None:
                        info.external_attr = (0o40755 << 16) | 0x10
                        archive.writestr(info, b"")
                    else:
                        info.compress_type = compress_type
                        info.external_attr = 0o644 << 16
                        archive.writestr(info, content.encode("utf-8"))
                    entry_count += 1
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            UnicodeError,
            OSError,
            MemoryError,
        ) as exc:
            raise PackagingError(f"ZIP serialisation failed: {exc}") from exc

        data = buffer.getvalue()
        elapsed_ms = (time.monotonic() - start) * 1000.0
        if trace is not None:
            trace.record_stage(
                "package",
                {
                    "record_count": len(records),
                    "entry_count": entry_count,
                    "bytes": len(data),
                    "compression": self.compression,
                },
                elapsed_ms=elapsed_ms,
            )
        logger.info(
            "Packaged %d records into %d archive entries (%d bytes)",
            len(records),
            entry_count,
            len(data),
        )
        return data

    async def package_async(
        self,
        records: Iterable[FileRecord],
        trace: TraceContext | None = None,
    ) -> bytes:
        """Run :meth:`package` in a worker thread."""
        return await asyncio.to_thread(self.package, list(records), trace)

    def write(
        self,
        records: Iterable[FileRecord],
        destination: str | Path,
        trace: TraceContext | None = None,
    ) -> Path:
        """Package *records* and write the archive to *destination*."""
        data = self.package(records, trace)
        path = Path(destination)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise PackagingError(f"Failed to write archive to {path}: {exc}") from exc
        return path
