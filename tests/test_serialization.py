"""
Serialization Tests

Tests for the proof transport shape, hex helpers and rejection of malformed
serialized proofs.
"""

import copy
import json
import os
import sys
import unittest

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from merkle_proofs import SHA256, SHA512, MerkleTree, ProofFormatError
from merkle_proofs.serialization import (
    decode_value,
    encode_value,
    lemma_from_dict,
    lemma_to_dict,
    proof_data_from_dict,
    proof_from_dict,
    proof_from_json,
    proof_to_dict,
    proof_to_json,
)
from merkle_proofs.utils import bytes_to_hex, hex_to_bytes, normalize_hex, strip_hex_prefix


class TestHexHelpers(unittest.TestCase):

    def test_strip_prefix(self):
        self.assertEqual(strip_hex_prefix("0xab"), "ab")
        self.assertEqual(strip_hex_prefix("0Xab"), "ab")
        self.assertEqual(strip_hex_prefix("ab"), "ab")

    def test_normalize(self):
        self.assertEqual(normalize_hex("ABCD"), "0xabcd")
        self.assertEqual(normalize_hex(" 0x01 "), "0x01")
        self.assertEqual(normalize_hex("0x"), "0x")

    def test_normalize_rejects_bad_input(self):
        for bad in ["0xzz", "abc", "0x1"]:
            with self.assertRaises(ValueError):
                normalize_hex(bad)
        with self.assertRaises(ValueError):
            normalize_hex("0x0102", expected_bytes=3)
        with self.assertRaises(ValueError):
            normalize_hex(12)

    def test_conversion(self):
        self.assertEqual(hex_to_bytes("0x1234"), b"\x12\x34")
        self.assertEqual(bytes_to_hex(b"\x12\x34"), "0x1234")
        self.assertEqual(bytes_to_hex(b"\x12\x34", prefix=False), "1234")


class TestValueEncoding(unittest.TestCase):

    def test_strings(self):
        self.assertEqual(encode_value("héllo"), ("héllo", "utf-8"))
        self.assertEqual(decode_value("héllo", "utf-8"), "héllo")

    def test_bytes(self):
        self.assertEqual(encode_value(b"\x00\xff"), ("0x00ff", "hex"))
        self.assertEqual(decode_value("0x00ff", "hex"), b"\x00\xff")

    def test_unsupported(self):
        with self.assertRaises(TypeError):
            encode_value(3.5)
        with self.assertRaises(ProofFormatError):
            decode_value("abc", "base64")
        with self.assertRaises(ProofFormatError):
            decode_value(5, "utf-8")
        with self.assertRaises(ProofFormatError):
            decode_value("0xzz", "hex")


class TestProofRoundTrip(unittest.TestCase):

    def setUp(self):
        self.tree = MerkleTree.from_values(["a", "b", "c", "d", "e"], SHA256)
        self.proof = self.tree.gen_proof("c")

    def test_dict_shape(self):
        data = proof_to_dict(self.proof)
        self.assertEqual(set(data), {"root_hash", "lemma", "value", "value_encoding"})
        self.assertNotIn("algorithm", data)
        self.assertEqual(data["root_hash"], bytes_to_hex(self.tree.root_hash))
        self.assertEqual(data["value"], "c")
        self.assertEqual(data["value_encoding"], "utf-8")

        lemma = data["lemma"]
        self.assertEqual(lemma["node_hash"], data["root_hash"])
        self.assertIn(lemma["sibling_hash"]["side"], ("left", "right"))
        depth = 0
        while lemma["sub_lemma"] is not None:
            lemma = lemma["sub_lemma"]
            depth += 1
        self.assertIsNone(lemma["sibling_hash"])
        self.assertEqual(depth, self.tree.height)

    def test_dict_round_trip(self):
        restored = proof_from_dict(proof_to_dict(self.proof), SHA256)
        self.assertEqual(restored, self.proof)
        self.assertTrue(restored.validate(self.tree.root_hash))

    def test_json_round_trip(self):
        text = proof_to_json(self.proof)
        json.loads(text)
        restored = proof_from_json(text, SHA256)
        self.assertEqual(restored, self.proof)
        self.assertTrue(restored.verify(self.tree.root_hash))

    def test_bytes_value_round_trip(self):
        values = [b"\x00\x01", b"\x02\x03", b"\xff"]
        tree = MerkleTree.from_values(values, SHA256)
        proof = tree.gen_proof(b"\xff")
        data = proof_to_dict(proof)
        self.assertEqual(data["value_encoding"], "hex")
        restored = proof_from_dict(data, SHA256)
        self.assertEqual(restored.value, b"\xff")
        self.assertTrue(restored.verify(tree.root_hash))

    def test_algorithm_supplied_by_caller(self):
        restored = proof_from_dict(proof_to_dict(self.proof), SHA512)
        self.assertIs(restored.algorithm, SHA512)
        self.assertFalse(restored.validate(self.tree.root_hash))

    def test_proof_data(self):
        data = proof_data_from_dict(proof_to_dict(self.proof))
        self.assertEqual(data, self.proof.into_data())

    def test_lemma_round_trip(self):
        self.assertEqual(lemma_from_dict(lemma_to_dict(self.proof.lemma)), self.proof.lemma)

    def test_large_tree(self):
        values = [str(i) for i in range(1500)]
        tree = MerkleTree.from_values(values, SHA256)
        proof = tree.gen_nth_proof(1499)
        self.assertEqual(proof_from_json(proof_to_json(proof), SHA256), proof)


class TestMalformedProofs(unittest.TestCase):

    def setUp(self):
        tree = MerkleTree.from_values(["a", "b", "c", "d"], SHA256)
        self.data = proof_to_dict(tree.gen_proof("b"))

    def assertRejected(self, data):
        with self.assertRaises(ProofFormatError):
            proof_from_dict(data, SHA256)

    def test_not_an_object(self):
        self.assertRejected([])
        self.assertRejected("proof")

    def test_missing_fields(self):
        for key in ("root_hash", "lemma", "value"):
            data = copy.deepcopy(self.data)
            del data[key]
            self.assertRejected(data)

    def test_null_lemma(self):
        data = copy.deepcopy(self.data)
        data["lemma"] = None
        self.assertRejected(data)

    def test_bad_hex(self):
        data = copy.deepcopy(self.data)
        data["root_hash"] = "0xnothex"
        self.assertRejected(data)

        data = copy.deepcopy(self.data)
        data["lemma"]["sub_lemma"]["node_hash"] = "0x123"
        self.assertRejected(data)

    def test_bad_side(self):
        data = copy.deepcopy(self.data)
        data["lemma"]["sibling_hash"]["side"] = "up"
        self.assertRejected(data)

        data = copy.deepcopy(self.data)
        data["lemma"]["sibling_hash"]["side"] = ["left"]
        self.assertRejected(data)

    def test_sibling_without_sub_lemma(self):
        data = copy.deepcopy(self.data)
        data["lemma"]["sub_lemma"] = None
        self.assertRejected(data)

    def test_sub_lemma_without_sibling(self):
        data = copy.deepcopy(self.data)
        data["lemma"]["sibling_hash"] = None
        self.assertRejected(data)

    def test_invalid_json(self):
        with self.assertRaises(ProofFormatError):
            proof_from_json("{not json", SHA256)

    def test_errors_are_value_errors(self):
        with self.assertRaises(ValueError):
            proof_from_json("[]", SHA256)


if __name__ == '__main__':
    unittest.main()
