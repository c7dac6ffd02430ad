"""Auth package: password digest and identity/session manager."""
from .password import hash_password, hash_password_sync
from .service import IdentityManager

__all__ = [
    "IdentityManager",
    "hash_password",
    "hash_password_sync",
]
