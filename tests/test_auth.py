from __future__ import annotations

import unittest
from unittest import mock

from app.core.auth import create_session_token, hash_password, parse_session_token, verify_password


class PasswordHashTests(unittest.TestCase):
    def test_hash_and_verify(self):
        digest, salt = hash_password("s3cret!")
        self.assertTrue(verify_password("s3cret!", digest, salt))
        self.assertFalse(verify_password("wrong", digest, salt))
        self.assertFalse(verify_password("", digest, salt))

    def test_empty_password_rejected(self):
        with self.assertRaises(ValueError):
            hash_password("")


class SessionTokenTests(unittest.TestCase):
    def test_round_trip(self):
        token = create_session_token(user_id=7, username="reader1", is_admin=False)
        user = parse_session_token(token)
        self.assertIsNotNone(user)
        assert user is not None
        self.assertEqual(user.user_id, 7)
        self.assertEqual(user.username, "reader1")
        self.assertFalse(user.is_admin)

    def test_tampered_token_rejected(self):
        token = create_session_token(user_id=7, username="reader1", is_admin=False)
        payload, sig = token.split(".", 1)
        self.assertIsNone(parse_session_token(payload + "." + "0" * len(sig)))
        self.assertIsNone(parse_session_token("garbage"))
        self.assertIsNone(parse_session_token(None))

    def test_expired_token_rejected(self):
        token = create_session_token(user_id=7, username="reader1", is_admin=True)
        with mock.patch("app.core.auth.time.time", return_value=10**12):
            self.assertIsNone(parse_session_token(token))


if __name__ == "__main__":
    unittest.main()
