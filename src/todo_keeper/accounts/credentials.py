# src/todo_keeper/accounts/credentials.py

"""
Password rules and one-way digests.

Digests are salted PBKDF2-SHA256 via passlib; plaintext passwords are never
stored or recoverable.
"""

from __future__ import annotations

import logging

from passlib.context import CryptContext

from ..core.errors import PasswordMismatch, PasswordTooShort

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def build_password_context(rounds: int | None = None) -> CryptContext:
    kwargs = {}
    if rounds:
        kwargs["pbkdf2_sha256__default_rounds"] = int(rounds)
    return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto", **kwargs)


def validate_password(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise PasswordTooShort(MIN_PASSWORD_LENGTH)


def check_password_confirmation(password: str, confirmation: str) -> None:
    """UI-boundary check: the confirmation field must repeat the password."""
    if password != confirmation:
        raise PasswordMismatch()


def verify_digest(ctx: CryptContext, password: str, digest: str) -> bool:
    try:
        return bool(ctx.verify(password, digest))
    except (ValueError, TypeError):
        # Unrecognized or malformed digest: treat as a mismatch.
        logger.warning("Stored credential digest could not be verified.")
        return False
