# utils/crypto.py
"""
Symmetric encryption for values stored at rest (announcement photo URLs).

The Fernet key is derived from ENCRYPTION_SECRET, so any secret string
works as configuration.
"""
import base64
import hashlib
import os
from functools import lru_cache

from cryptography.fernet import Fernet


@lru_cache(maxsize=1)
def _fernet() -> Fernet:
     secret = os.getenv("ENCRYPTION_SECRET")
     if not secret:
          raise RuntimeError("ENCRYPTION_SECRET is not set")
     key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())
     return Fernet(key)


def encrypt_data(value: str) -> str:
     return _fernet().encrypt(value.encode("utf-8")).decode("ascii")


def decrypt_data(token: str) -> str:
     """Raises cryptography.fernet.InvalidToken when the token was not made with this secret."""
     return _fernet().decrypt(token.encode("ascii")).decode("utf-8")
