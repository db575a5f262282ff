"""
Shared utilities for eqrender.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps for session directories
- Path display helpers
"""

from eqrender.utils.paths import display_path
from eqrender.utils.timestamp import now

__all__ = ["display_path", "now"]
