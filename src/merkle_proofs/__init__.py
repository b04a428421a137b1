"""
Merkle Proofs

A Merkle tree library with inclusion proofs.

Key features:
- Tree construction over any ordered sequence of bytes, strings or Hashable values
- Pluggable hash algorithms (sha1, sha256, sha384, sha512, blake2b, blake2s)
- Recursive lemma proofs, generated by value or by leaf position
- Proof validation by digest recomputation
- JSON transport shape for proofs
- CLI and REST API front ends

Usage:
    from merkle_proofs import MerkleTree, SHA256

    tree = MerkleTree.from_values(["a", "b", "c", "d"], SHA256)
    proof = tree.gen_proof("c")
    assert proof.validate(tree.root_hash)
"""

from .constants import VERSION
from .merkle import (
    Algorithm,
    Hashable,
    UnsupportedAlgorithmError,
    get_algorithm,
    SHA1,
    SHA256,
    SHA384,
    SHA512,
    BLAKE2B,
    BLAKE2S,
    MerkleTree,
    Side,
    Positioned,
    Lemma,
    Proof,
    ProofData,
)
from .serialization import (
    ProofFormatError,
    proof_to_dict,
    proof_from_dict,
    proof_to_json,
    proof_from_json,
)

__version__ = VERSION

__all__ = [
    'Algorithm',
    'Hashable',
    'UnsupportedAlgorithmError',
    'get_algorithm',
    'SHA1',
    'SHA256',
    'SHA384',
    'SHA512',
    'BLAKE2B',
    'BLAKE2S',
    'MerkleTree',
    'Side',
    'Positioned',
    'Lemma',
    'Proof',
    'ProofData',
    'ProofFormatError',
    'proof_to_dict',
    'proof_from_dict',
    'proof_to_json',
    'proof_from_json',
]
