# password_hash.py
from passlib.hash import pbkdf2_sha256


def hash_password(password: str) -> str:
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pbkdf2_sha256.verify(password, hashed)
    except ValueError:
        # Stored value is not a pbkdf2 hash (e.g. a legacy plaintext import).
        return False
