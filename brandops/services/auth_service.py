"""
Auth Service — Password hashing and verification.
"""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # Stored value is not a recognised hash (e.g. a legacy plaintext row)
        logger.warning("Password verification skipped: stored hash is not a bcrypt hash.")
        return False
