"""
Dispatch URLs without a web server and write raw HTTP responses to stdout.

Usage:
    python standalone.py /Products/list.csv GET
"""

import sys
from pathlib import Path

from conductor import Delegate

delegate = Delegate(app_dir=Path(__file__).parent / "app")


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else "/"
    method = sys.argv[2] if len(sys.argv) > 2 else None
    delegate.bootstrap(url, method=method).emit()
