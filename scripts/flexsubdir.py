#!/usr/bin/env python3
"""Driver executable for the orchestrator's volume plugin directory.

Installed as ``<plugin-dir>/<vendor>~flexsubdir/flexsubdir`` with the
``flexsubdir`` package copied to a ``lib/`` directory beside it. Run from a
checkout it uses ``src/`` instead.
"""

from __future__ import annotations

import sys
from pathlib import Path

HERE = Path(__file__).resolve().parent

for candidate in (HERE / "lib", HERE.parent / "src"):
    if (candidate / "flexsubdir" / "__init__.py").exists():
        sys.path.insert(0, str(candidate))
        break

from flexsubdir.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
