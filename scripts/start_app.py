"""Convenience launcher for the Code Splitter web UI.

Usage::

    python scripts/start_app.py
    python scripts/start_app.py --port 8502
"""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path


def build_command(app_path: Path, port: int, host: str) -> list[str]:
    return [
        sys.executable, "-m", "streamlit", "run",
        str(app_path),
        "--server.port", str(port),
        "--server.address", host,
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description="Start the Code Splitter web UI")
    parser.add_argument("--port", type=int, default=8501, help="Port to serve the app on")
    parser.add_argument("--host", type=str, default="localhost", help="Host to bind to")
    args = parser.parse_args()

    app_path = Path(__file__).resolve().parent.parent / "src" / "ui" / "app.py"
    if not app_path.exists():
        print(f"Error: app not found at {app_path}")
        sys.exit(1)

    cmd = build_command(app_path, args.port, args.host)
    print(f"Starting Code Splitter: {' '.join(cmd)}")
    subprocess.run(cmd)


if __name__ == "__main__":
    main()
