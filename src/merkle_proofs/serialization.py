"""
Proof Serialization

This module converts proofs to and from their transport shape:

    {
        "root_hash": "0x...",
        "lemma": {
            "node_hash": "0x...",
            "sibling_hash": {"side": "left" | "right", "hash": "0x..."} | null,
            "sub_lemma": {...} | null
        },
        "value": "...",
        "value_encoding": "utf-8" | "hex"
    }

The hash algorithm is not part of the shape. It is supplied by the caller when
a proof is reconstituted.

Input is treated as untrusted: structural problems raise ``ProofFormatError``
before any digest is used.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    SIDE_LEFT,
    SIDE_RIGHT,
    VALUE_ENCODING_HEX,
    VALUE_ENCODING_UTF8,
)
from .merkle.hashutils import Algorithm, Hashable
from .merkle.proof import Lemma, Positioned, Proof, ProofData, Side
from .utils.hex_helpers import bytes_to_hex, hex_to_bytes


class ProofFormatError(ValueError):
    """Exception raised for malformed serialized proofs."""
    pass


_SIDES = {SIDE_LEFT: Side.LEFT, SIDE_RIGHT: Side.RIGHT}


def encode_value(value: Any) -> Tuple[str, str]:
    """
    Encode a proof value for transport.

    Strings travel as-is; bytes-like values and ``Hashable`` instances travel
    as hex of their canonical bytes.

    Returns:
        Tuple of (encoded value, encoding name)

    Raises:
        TypeError: If the value has no transport encoding
    """
    if isinstance(value, str):
        return value, VALUE_ENCODING_UTF8
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes_to_hex(value), VALUE_ENCODING_HEX
    if isinstance(value, Hashable):
        return bytes_to_hex(value.hashable_bytes()), VALUE_ENCODING_HEX
    raise TypeError(f"Cannot serialize proof value of type {type(value).__name__}")


def decode_value(encoded: Any, encoding: str = VALUE_ENCODING_UTF8) -> Any:
    """Decode a transported proof value (str for utf-8, bytes for hex)."""
    if not isinstance(encoded, str):
        raise ProofFormatError("Proof value must be a string")
    if encoding == VALUE_ENCODING_UTF8:
        return encoded
    if encoding == VALUE_ENCODING_HEX:
        try:
            return hex_to_bytes(encoded)
        except ValueError as e:
            raise ProofFormatError(f"Invalid hex proof value: {e}")
    raise ProofFormatError(f"Unknown value encoding: {encoding}")


def _decode_digest(data: Dict[str, Any], key: str) -> bytes:
    if key not in data:
        raise ProofFormatError(f"Missing field '{key}'")
    try:
        return hex_to_bytes(data[key])
    except ValueError as e:
        raise ProofFormatError(f"Invalid digest in '{key}': {e}")


def _decode_sibling(data: Any) -> Optional[Positioned]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ProofFormatError("'sibling_hash' must be an object or null")
    side_tag = data.get("side")
    side = _SIDES.get(side_tag) if isinstance(side_tag, str) else None
    if side is None:
        raise ProofFormatError(f"Invalid sibling side: {data.get('side')!r}")
    return Positioned(side, _decode_digest(data, "hash"))


def lemma_to_dict(lemma: Lemma) -> Dict[str, Any]:
    """Convert a lemma chain to its nested dict shape."""
    chain: List[Lemma] = []
    current: Optional[Lemma] = lemma
    while current is not None:
        chain.append(current)
        current = current.sub_lemma

    result: Optional[Dict[str, Any]] = None
    for level in reversed(chain):
        sibling = None
        if level.sibling_hash is not None:
            sibling = {
                "side": level.sibling_hash.side.value,
                "hash": bytes_to_hex(level.sibling_hash.value),
            }
        result = {
            "node_hash": bytes_to_hex(level.node_hash),
            "sibling_hash": sibling,
            "sub_lemma": result,
        }
    return result


def lemma_from_dict(data: Any) -> Lemma:
    """
    Rebuild a lemma chain from its nested dict shape.

    Raises:
        ProofFormatError: On missing fields, bad hex, bad side tags, or a
            level carrying a sibling without a sub-lemma (or the reverse)
    """
    levels: List[Tuple[bytes, Optional[Positioned]]] = []
    current = data
    while current is not None:
        if not isinstance(current, dict):
            raise ProofFormatError("Lemma must be an object")
        node_hash = _decode_digest(current, "node_hash")
        sibling = _decode_sibling(current.get("sibling_hash"))
        sub = current.get("sub_lemma")
        if (sibling is None) != (sub is None):
            raise ProofFormatError(
                "Lemma must have both 'sibling_hash' and 'sub_lemma' or neither"
            )
        levels.append((node_hash, sibling))
        current = sub

    if not levels:
        raise ProofFormatError("Missing lemma")

    lemma = None
    for node_hash, sibling in reversed(levels):
        lemma = Lemma(node_hash=node_hash, sibling_hash=sibling, sub_lemma=lemma)
    return lemma


def proof_to_dict(proof) -> Dict[str, Any]:
    """Convert a Proof (or ProofData) to its transport shape."""
    value, encoding = encode_value(proof.value)
    return {
        "root_hash": bytes_to_hex(proof.root_hash),
        "lemma": lemma_to_dict(proof.lemma),
        "value": value,
        "value_encoding": encoding,
    }


def proof_data_from_dict(data: Any) -> ProofData:
    """Rebuild ProofData (a proof without its algorithm) from the transport shape."""
    if not isinstance(data, dict):
        raise ProofFormatError("Proof must be an object")
    if "value" not in data:
        raise ProofFormatError("Missing field 'value'")
    return ProofData(
        root_hash=_decode_digest(data, "root_hash"),
        lemma=lemma_from_dict(data.get("lemma")),
        value=decode_value(data["value"], data.get("value_encoding", VALUE_ENCODING_UTF8)),
    )


def proof_from_dict(data: Any, algorithm: Algorithm) -> Proof:
    """Rebuild a Proof from the transport shape and the algorithm it was built with."""
    return proof_data_from_dict(data).into_proof(algorithm)


def proof_to_json(proof, indent: Optional[int] = 2) -> str:
    return json.dumps(proof_to_dict(proof), indent=indent)


def proof_from_json(text: str, algorithm: Algorithm) -> Proof:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProofFormatError(f"Invalid proof JSON: {e}")
    return proof_from_dict(data, algorithm)
