"""Password hashing utilities."""

import bcrypt

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72
BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plaintext password with bcrypt.

    Args:
        password: Plaintext password, at most 72 bytes once UTF-8 encoded
        rounds: bcrypt cost factor

    Returns:
        The ``$2b$`` modular-crypt hash as text

    Raises:
        ValueError: If the encoded password is longer than bcrypt accepts
    """
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(
            f"Password must not exceed {BCRYPT_MAX_PASSWORD_BYTES} bytes"
        )
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("utf-8")
