#!/usr/bin/env python3
"""Validate the packaged rate tables from a source checkout."""

from __future__ import annotations

import sys
from pathlib import Path

# Running from a checkout works without an install once ``src`` is importable.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from swetax.backend.config.validator import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
