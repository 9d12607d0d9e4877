"""Tests for password hashing and JWT round trips."""

import unittest

import jwt

from ratatoing.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords(unittest.TestCase):
    def test_hash_verifies_and_rejects_wrong_password(self) -> None:
        hashed = hash_password("anyone-can-cook")
        self.assertNotEqual(hashed, "anyone-can-cook")
        self.assertTrue(verify_password("anyone-can-cook", hashed))
        self.assertFalse(verify_password("anyone-can-bake", hashed))

    def test_malformed_hash_is_rejected(self) -> None:
        self.assertFalse(verify_password("anyone-can-cook", "not-a-bcrypt-hash"))


class TestTokens(unittest.TestCase):
    def test_payload_carries_subject_and_rank(self) -> None:
        payload = decode_access_token(create_access_token(sub=7, rank="Banson"))
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["rank"], "Banson")
        self.assertIn("exp", payload)

    def test_tampered_token_is_rejected(self) -> None:
        token = create_access_token(sub=7, rank="Nibbler")
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token + "x")
