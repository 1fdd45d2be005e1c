"""Tests for bcrypt password hashing."""

import bcrypt
import pytest

from src.user_api.core.security import hash_password


class TestPasswordHashing:
    def test_hash_verifies(self):
        hashed = hash_password("12345678", rounds=4)

        assert hashed != "12345678"
        assert bcrypt.checkpw(b"12345678", hashed.encode())
        assert not bcrypt.checkpw(b"12345679", hashed.encode())

    def test_hashes_are_salted(self):
        assert hash_password("same-pass", rounds=4) != hash_password("same-pass", rounds=4)

    def test_cost_is_encoded_in_hash(self):
        hashed = hash_password("12345678", rounds=4)

        assert hashed.startswith("$2b$04$")
        assert len(hashed) == 60

    def test_whitespace_is_significant(self):
        hashed = hash_password("        ", rounds=4)

        assert bcrypt.checkpw(b"        ", hashed.encode())
        assert not bcrypt.checkpw(b"", hashed.encode())

    def test_rejects_passwords_over_72_bytes(self):
        with pytest.raises(ValueError, match="72 bytes"):
            hash_password("é" * 37, rounds=4)
