"""
Password digest.

Unsalted single-pass SHA-256, hex encoded. Deterministic, so login can
compare digests verbatim. Illustrative only: a real backend must use a
salted, slow KDF.
"""
import asyncio
import hashlib


def hash_password_sync(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


async def hash_password(password: str) -> str:
    """Digest the password off the event loop."""
    return await asyncio.to_thread(hash_password_sync, password)
