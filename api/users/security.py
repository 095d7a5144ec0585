"""
Password hashing for stored user credentials.
"""

from __future__ import annotations

import bcrypt


class PasswordError(ValueError):
    pass


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise PasswordError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")
