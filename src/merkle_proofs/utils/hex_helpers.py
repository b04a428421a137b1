"""
Hex String Utilities

This module provides helpers for moving digests between ``bytes`` and the
``0x``-prefixed hex strings used by the proof transport shape, the CLI and
the REST API.
"""

from typing import Optional

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def strip_hex_prefix(hex_str: str) -> str:
    """Remove a leading '0x'/'0X' if present."""
    if hex_str[:2] in ("0x", "0X"):
        return hex_str[2:]
    return hex_str


def normalize_hex(hex_str: str, expected_bytes: Optional[int] = None) -> str:
    """
    Normalize a hex string to lowercase with a '0x' prefix.

    Args:
        hex_str: Hex string, with or without '0x' prefix
        expected_bytes: Optional expected byte length for validation

    Returns:
        Normalized hex string

    Raises:
        ValueError: If the string is not valid hex or has the wrong length

    Examples:
        >>> normalize_hex("ABCD")
        '0xabcd'
        >>> normalize_hex("0x01", expected_bytes=1)
        '0x01'
    """
    if not isinstance(hex_str, str):
        raise ValueError(f"Expected a hex string, got {type(hex_str).__name__}")

    hex_part = strip_hex_prefix(hex_str.strip())

    if not all(c in _HEX_DIGITS for c in hex_part):
        raise ValueError(f"Invalid hex string: {hex_str}")
    if len(hex_part) % 2 == 1:
        raise ValueError(f"Hex string has an odd number of digits: {hex_str}")

    if expected_bytes is not None:
        actual_bytes = len(hex_part) // 2
        if actual_bytes != expected_bytes:
            raise ValueError(f"Expected {expected_bytes} bytes, got {actual_bytes} bytes")

    return "0x" + hex_part.lower()


def hex_to_bytes(hex_str: str, expected_bytes: Optional[int] = None) -> bytes:
    """
    Convert a hex string to bytes.

    Examples:
        >>> hex_to_bytes("0x1234")
        b'\\x124'
    """
    return bytes.fromhex(normalize_hex(hex_str, expected_bytes)[2:])


def bytes_to_hex(data: bytes, prefix: bool = True) -> str:
    """
    Convert bytes to a hex string.

    Examples:
        >>> bytes_to_hex(b'\\x12\\x34')
        '0x1234'
        >>> bytes_to_hex(b'\\x12\\x34', prefix=False)
        '1234'
    """
    hex_str = bytes(data).hex()
    return f"0x{hex_str}" if prefix else hex_str
