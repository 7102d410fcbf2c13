"""exportmap Core - Shared constants and validation.

Import specific names from submodules:
    from exportmap.core import constants
    from exportmap.core import validators
"""

from exportmap.core import constants, validators

__all__ = [
    "constants",
    "validators",
]
