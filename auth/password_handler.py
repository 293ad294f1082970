import bcrypt


def hash_password(password: str | bytes) -> str:
    """
    Hash a staff password with a fresh bcrypt salt, accepting str or bytes.
    """
    password_bytes = password if isinstance(password, bytes) else password.encode('utf-8')
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode('utf-8')


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # stored value is not a bcrypt hash
        return False
