from passlib.context import CryptContext

from tenant_service.core.config import settings


class PasswordHasher:
    """bcrypt hashing through passlib; the cost factor comes from configuration."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str | None) -> bool:
        # Missing hash means the account cannot log in
        if not hashed_password:
            return False
        try:
            return self._context.verify(password, hashed_password)
        except ValueError:
            return False


password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)


def hash_password(password: str) -> str:
    return password_hasher.hash(password)
