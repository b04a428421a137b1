"""
Service Layer Tests

Tests for the shared proof functions in main.py, the ProofService used by the
REST API, and environment-driven settings.
"""

import json
import os
import sys
import tempfile
import unittest
from unittest.mock import patch

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from merkle_proofs import SHA256, SHA512, MerkleTree, ProofFormatError
from merkle_proofs.api import ProofNotFoundError, ProofService, ProofServiceError
from merkle_proofs.config import get_settings
from merkle_proofs.main import (
    ProofResult,
    build_tree,
    generate_nth_proof,
    generate_proof,
    load_values,
    resolve_algorithm,
    verify_proof,
)
from merkle_proofs.utils import bytes_to_hex


VALUES = ["alice", "bob", "carol", "dave", "erin"]


class TestLoadValues(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def write(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_json_array(self):
        path = self.write("values.json", json.dumps(VALUES))
        self.assertEqual(load_values(path), VALUES)

    def test_text_lines(self):
        path = self.write("values.txt", "alice\nbob\n\ncarol\n")
        self.assertEqual(load_values(path), ["alice", "bob", "carol"])

    def test_json_must_hold_strings(self):
        path = self.write("values.json", "[1, 2, 3]")
        with self.assertRaises(ValueError):
            load_values(path)

    def test_empty_file(self):
        path = self.write("empty.txt", "")
        self.assertEqual(load_values(path), [])


class TestMainFunctions(unittest.TestCase):

    def test_resolve_algorithm(self):
        self.assertIs(resolve_algorithm("sha512"), SHA512)
        self.assertIs(resolve_algorithm(SHA256), SHA256)
        with self.assertRaises(ValueError):
            resolve_algorithm("md2")

    def test_build_tree(self):
        tree = build_tree(VALUES, "sha256")
        self.assertEqual(tree, MerkleTree.from_values(VALUES, SHA256))

    def test_generate_proof(self):
        result = generate_proof(VALUES, "carol")
        self.assertIsInstance(result, ProofResult)
        self.assertEqual(result.metadata["leaf_index"], 2)
        self.assertEqual(result.metadata["leaf_count"], 5)
        self.assertEqual(result.metadata["tree_height"], 3)
        self.assertEqual(result.metadata["proof_length"], 3)
        self.assertEqual(result.metadata["algorithm"], "sha256")
        self.assertEqual(result.metadata["leaf_hash"], bytes_to_hex(SHA256.hash_leaf("carol")))
        self.assertTrue(result.proof.validate(result.root))

    def test_generate_proof_absent(self):
        self.assertIsNone(generate_proof(VALUES, "mallory"))
        self.assertIsNone(generate_proof([], "alice"))

    def test_generate_nth_proof(self):
        result = generate_nth_proof(VALUES, 4, "blake2b")
        self.assertEqual(result.proof.value, "erin")
        self.assertEqual(result.metadata["algorithm"], "blake2b")

    def test_generate_nth_proof_out_of_range(self):
        with self.assertRaises(ValueError):
            generate_nth_proof(VALUES, 5)
        with self.assertRaises(ValueError):
            generate_nth_proof(VALUES, -1)

    def test_result_to_dict(self):
        output = generate_proof(VALUES, "bob").to_dict()
        self.assertEqual(set(output), {"proof", "root", "metadata"})
        self.assertEqual(output["root"], output["proof"]["root_hash"])
        json.dumps(output)

    def test_verify_proof(self):
        output = generate_proof(VALUES, "dave").to_dict()
        self.assertTrue(verify_proof(output["proof"], output["root"]))
        self.assertTrue(verify_proof(output["proof"], bytes.fromhex(output["root"][2:])))

    def test_verify_proof_rejects(self):
        output = generate_proof(VALUES, "dave").to_dict()
        other_root = bytes_to_hex(build_tree(VALUES[:4]).root_hash)
        self.assertFalse(verify_proof(output["proof"], other_root))
        self.assertFalse(verify_proof(output["proof"], output["root"], "sha512"))

        swapped = dict(output["proof"], value="erin")
        self.assertFalse(verify_proof(swapped, output["root"]))

    def test_verify_malformed(self):
        output = generate_proof(VALUES, "dave").to_dict()
        broken = dict(output["proof"], lemma={"node_hash": "0x00", "sub_lemma": {}})
        with self.assertRaises(ProofFormatError):
            verify_proof(broken, output["root"])
        with self.assertRaises(ValueError):
            verify_proof(output["proof"], "not-hex")


class TestProofService(unittest.TestCase):

    def setUp(self):
        self.service = ProofService()

    def test_get_tree(self):
        info = self.service.get_tree(VALUES)
        self.assertEqual(info["count"], 5)
        self.assertEqual(info["height"], 3)
        self.assertEqual(info["algorithm"], "sha256")
        self.assertEqual(info["root_hash"], bytes_to_hex(MerkleTree.from_values(VALUES).root_hash))

    def test_default_algorithm(self):
        service = ProofService(algorithm="sha384")
        self.assertEqual(service.get_tree(VALUES)["algorithm"], "sha384")
        self.assertEqual(service.get_tree(VALUES, "sha1")["algorithm"], "sha1")

    def test_unknown_algorithm(self):
        with self.assertRaises(ProofServiceError):
            self.service.get_tree(VALUES, "nope")

    def test_algorithm_name(self):
        service = ProofService(algorithm="SHA-512")
        self.assertEqual(service.algorithm_name(), "sha512")
        self.assertEqual(service.algorithm_name("blake2b"), "blake2b")
        with self.assertRaises(ProofServiceError):
            ProofService(algorithm="nope").algorithm_name()

    def test_get_proof_by_value(self):
        result = self.service.get_proof(VALUES, value="bob")
        self.assertEqual(result["leaf_index"], 1)
        self.assertEqual(result["root_hash"], result["proof"]["root_hash"])
        self.assertTrue(self.service.verify(result["proof"], result["root_hash"]))

    def test_get_proof_by_index(self):
        result = self.service.get_proof(VALUES, index=3)
        self.assertEqual(result["proof"]["value"], "dave")

    def test_get_proof_not_found(self):
        with self.assertRaises(ProofNotFoundError):
            self.service.get_proof(VALUES, value="mallory")

    def test_get_proof_bad_requests(self):
        with self.assertRaises(ProofServiceError):
            self.service.get_proof(VALUES)
        with self.assertRaises(ProofServiceError):
            self.service.get_proof(VALUES, index=10)

    def test_verify_malformed(self):
        result = self.service.get_proof(VALUES, value="bob")
        broken = dict(result["proof"], root_hash="0xzz")
        with self.assertRaises(ProofServiceError):
            self.service.verify(broken, result["root_hash"])


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings()
        self.assertEqual(settings.hash_algorithm, "sha256")
        self.assertEqual(settings.api_host, "127.0.0.1")
        self.assertEqual(settings.api_port, 8000)
        self.assertEqual(settings.log_level, "INFO")

    def test_from_environment(self):
        env = {
            "MERKLE_HASH_ALGORITHM": "blake2s",
            "MERKLE_API_HOST": "0.0.0.0",
            "MERKLE_API_PORT": "9000",
            "MERKLE_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()
        self.assertEqual(settings.hash_algorithm, "blake2s")
        self.assertEqual(settings.api_host, "0.0.0.0")
        self.assertEqual(settings.api_port, 9000)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_invalid_port(self):
        for port in ("http", "0", "70000"):
            with patch.dict(os.environ, {"MERKLE_API_PORT": port}, clear=True):
                with self.assertRaises(ValueError):
                    get_settings()


if __name__ == '__main__':
    unittest.main()
