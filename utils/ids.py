# utils/ids.py
"""Identifier and one-time code generators."""
import secrets
import string
import time


def generate_otp(length: int = 6) -> str:
     """Numeric one-time password."""
     return "".join(secrets.choice(string.digits) for _ in range(length))


def generate_billing_id() -> str:
     """UPKYPBILL followed by six digits."""
     return f"UPKYPBILL{secrets.randbelow(1_000_000):06d}"


def generate_agreement_id() -> str:
     """UPKYPLEASE followed by six digits."""
     return f"UPKYPLEASE{secrets.randbelow(1_000_000):06d}"


def timestamp_ms() -> int:
     return int(time.time() * 1000)
