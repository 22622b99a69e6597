"""Kernel value types — public re-export surface.

Modules:
  result.py — Ok, Err, Result
"""

from launchd_plist.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
