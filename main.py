"""Command line entry point for the Code Splitter.

Splits a concatenated text dump into files and writes them as a ZIP
archive, using the same splitter and packager as the Streamlit page.

Usage:
    # Split with the configured delimiter and write split_files.zip
    python main.py --input dump.txt

    # Custom delimiter and output path
    python main.py --input dump.txt --delimiter "[[FILE]]" --output out/files.zip

    # Only list the detected files
    python main.py --input dump.txt --list

    # Read from stdin
    cat dump.txt | python main.py --input -

Exit codes:
    0 - Success
    1 - No file headers found
    2 - Invalid input, configuration or packaging error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.core.errors import NoHeadersFoundError, PackagingError, SplitterError
from src.core.settings import DEFAULT_SETTINGS_PATH, load_settings
from src.core.trace.trace_context import TraceContext
from src.core.types import FileRecord
from src.libs.packager.zip_packager import ZipPackager
from src.libs.splitter.splitter_factory import SplitterFactory
from src.observability.logger import configure_logging, get_logger, log_trace


LOGGER = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Split a concatenated text dump into files and package them as a ZIP.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--input", "-i",
        required=True,
        help="Text file to split, or '-' to read from stdin",
    )

    parser.add_argument(
        "--delimiter", "-d",
        default=None,
        help="Literal marker before each file path (default: splitter.delimiter from config)",
    )

    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Archive path (default: archive.filename from config)",
    )

    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="Only list detected files, do not write an archive",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (default: config/settings.yaml in the repository)",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def read_input(source: str) -> str:
    """Read the dump from *source* (``-`` means stdin)."""
    if source == "-":
        # undecodable bytes are replaced, as for uploads
        return sys.stdin.buffer.read().decode("utf-8", errors="replace")
    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path.read_text(encoding="utf-8", errors="replace")


def print_records(records: List[FileRecord], preview_chars: int) -> None:
    for record in records:
        preview = record.preview(preview_chars).replace("\n", " ")
        print(f"{record.path}\t{preview}")


def stage_summary(trace: TraceContext, stage_name: str) -> Optional[str]:
    """One-line summary of a recorded stage, or None if it never ran."""
    data = trace.get_stage_data(stage_name)
    if data is None:
        return None
    details = ", ".join(f"{key}={value}" for key, value in data.items())
    try:
        timing = f" in {trace.elapsed_ms(stage_name):.2f} ms"
    except KeyError:
        timing = ""
    return f"{stage_name}: {details}{timing}"


def print_stage_summary(trace: TraceContext, stage_name: str) -> None:
    summary = stage_summary(trace, stage_name)
    if summary is not None:
        print(summary, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the splitter.

    Returns:
        Exit code (0=success, 1=no headers found, 2=error)
    """
    args = parse_args(argv)

    try:
        config_path = Path(args.config).resolve() if args.config else DEFAULT_SETTINGS_PATH
        settings = load_settings(config_path)
    except (FileNotFoundError, ValueError) as exc:
        LOGGER.error("Failed to load settings: %s", exc)
        return 2

    configure_logging(settings)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    delimiter = args.delimiter if args.delimiter is not None else settings.delimiter

    try:
        text = read_input(args.input)
    except (FileNotFoundError, OSError) as exc:
        LOGGER.error("%s", exc)
        return 2

    trace = TraceContext(trace_type="split")
    trace.metadata["source"] = args.input
    try:
        splitter = SplitterFactory.create(settings, delimiter=delimiter)
        records = splitter.split_text(text, trace=trace)
        if not records:
            raise NoHeadersFoundError(delimiter)
    except NoHeadersFoundError as exc:
        LOGGER.warning("%s", exc)
        return 1
    except SplitterError as exc:
        LOGGER.error("Invalid input: %s", exc)
        return 2
    finally:
        if args.verbose:
            print_stage_summary(trace, "split")
        log_trace(LOGGER, trace)

    LOGGER.info("Found %d file(s)", len(records))

    if args.list:
        print_records(records, settings.preview_chars)
        return 0

    output = args.output or settings.archive_name
    packager = ZipPackager.from_settings(settings)
    package_trace = TraceContext(trace_type="package")
    try:
        path = packager.write(records, output, trace=package_trace)
    except PackagingError as exc:
        LOGGER.error("Failed to create archive: %s", exc)
        return 2
    finally:
        if args.verbose:
            print_stage_summary(package_trace, "package")
        log_trace(LOGGER, package_trace)

    print(f"[OK] Wrote {len(records)} file(s) to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
