"""Password hashing and access token helpers."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from src.config import get_settings
from src.constants import ACCESS_TOKEN_EXPIRE_DAYS, BCRYPT_ROUNDS, JWT_ALGORITHM

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


class TokenPayload(BaseModel):
    """Claims carried by an access token."""

    sub: str  # user id
    exp: int
    type: str = "access"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str | None) -> bool:
    """Check a password; runs a dummy hash when there is nothing to compare against.

    The dummy round keeps the response time of "unknown email" in line with
    "wrong password" so login cannot be used to enumerate accounts.
    """
    if not hashed:
        pwd_context.dummy_verify()
        return False
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(UTC) + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    payload = {
        "sub": str(user_id),
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.app_secret_key, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> TokenPayload | None:
    """Verify signature and expiry; None for anything that does not check out."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.app_secret_key, algorithms=[JWT_ALGORITHM])
        claims = TokenPayload.model_validate(payload)
    except (JWTError, ValidationError):
        return None
    if claims.type != "access" or not claims.sub.isdigit():
        return None
    return claims
