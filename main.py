"""Main entry point for the PocketPlayer application."""
from __future__ import annotations

import sys

from PocketPlayer.__main__ import main as app_main


if __name__ == "__main__":
    sys.exit(app_main())
