"""
Merkle Tree Constants

This module contains the constants shared by the hashing, tree and proof
modules, as well as the transport and service layers.

References:
- RFC 6962 (Certificate Transparency), section 2.1: leaf/node domain separation
"""

# ====================
# Hashing Constants
# ====================

# Prefix byte hashed in front of every leaf value.
LEAF_PREFIX = b"\x00"

# Prefix byte hashed in front of every pair of child digests.
# Keeps interior digests disjoint from leaf digests.
NODE_PREFIX = b"\x01"

# Hash algorithm used when none is configured
DEFAULT_HASH_ALGORITHM = "sha256"

# Algorithms exposed by name (hashlib constructor names)
SUPPORTED_HASH_ALGORITHMS = (
    "sha1",
    "sha256",
    "sha384",
    "sha512",
    "blake2b",
    "blake2s",
)

# ====================
# Transport Constants
# ====================

# Side tags used in the serialized lemma shape
SIDE_LEFT = "left"
SIDE_RIGHT = "right"

# Encodings for proof values in the serialized shape
VALUE_ENCODING_UTF8 = "utf-8"
VALUE_ENCODING_HEX = "hex"

# ====================
# Service Constants
# ====================

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8000
DEFAULT_LOG_LEVEL = "INFO"

VERSION = "1.0.0"
