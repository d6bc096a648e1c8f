"""
Bundled benchmark suites.

Each submodule groups ready-made candidate comparisons.
"""

from . import strings

__all__ = [
    "strings",
]
