from __future__ import annotations

import sys as _sys

if _sys.version_info < (3, 10):
    raise RuntimeError(f"seat-rotation requires Python 3.10 or newer; detected {_sys.version.split()[0]}")

__all__: list[str] = []
