"""
Utility Functions

This package provides hex string helpers used by the transport, CLI and API
layers.
"""

from .hex_helpers import (
    strip_hex_prefix,
    normalize_hex,
    hex_to_bytes,
    bytes_to_hex,
)

__all__ = [
    'strip_hex_prefix',
    'normalize_hex',
    'hex_to_bytes',
    'bytes_to_hex',
]
