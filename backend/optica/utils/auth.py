from passlib.context import CryptContext


def make_pwd_context(rounds: int) -> CryptContext:
    """Bcrypt context with an explicit work factor (``Settings.BCRYPT_ROUNDS``)."""
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=rounds,
    )


def get_password_hash(pwd_context: CryptContext, password: str) -> str:
    return pwd_context.hash(password)


def verify_password(pwd_context: CryptContext, plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def normalize_email(email: str) -> str:
    """Return a normalized email address for comparison and storage."""
    return email.strip().lower()
