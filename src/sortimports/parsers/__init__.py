"""Statement discovery for ES modules and Python."""
from __future__ import annotations

from sortimports.parsers.ecmascript import ImportScanner, ScanError, scan_imports
from sortimports.parsers.python import ImportCollector, collect_imports

__all__ = [
    "ImportScanner",
    "ScanError",
    "scan_imports",
    "ImportCollector",
    "collect_imports",
]
