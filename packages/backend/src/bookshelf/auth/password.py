"""Password hashing utilities.

Learn: bcrypt salts automatically and is deliberately slow. Passwords are
truncated to 72 bytes (bcrypt's limit) before hashing AND verifying, so
both sides always see the same input.
"""

import bcrypt

BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password with a fresh random salt."""
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a candidate password against a stored bcrypt hash.

    A corrupt or non-bcrypt hash counts as a mismatch rather than an error.
    """
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Checked against when the email is unknown, so a failed login costs the
# same bcrypt round whether or not the account exists.
DUMMY_HASH = hash_password("bookshelf-dummy-password", rounds=BCRYPT_ROUNDS)
