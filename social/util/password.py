"""Password hashing utilities (bcrypt).

bcrypt only considers the first 72 bytes of a password, so longer inputs are
rejected at the API boundary. Hashing runs in a worker thread to keep the
event loop responsive.
"""

import asyncio

import bcrypt

MAX_PASSWORD_BYTES = 72


def _hash(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode(
        "utf-8"
    )


def _check(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash, or password is over the limit
        return False


async def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh salt.

    Args:
        password: Plain-text password (at most 72 bytes)
        rounds: bcrypt work factor

    Returns:
        bcrypt hash string
    """
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError("Password must be at most 72 bytes")
    return await asyncio.to_thread(_hash, password, rounds)


async def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored hash.

    Args:
        password: Plain-text password
        password_hash: Stored bcrypt hash

    Returns:
        True if the password matches
    """
    return await asyncio.to_thread(_check, password, password_hash)
