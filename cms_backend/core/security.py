"""
Security utilities: JWT, password hashing, reset tokens
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import hashlib
import secrets

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from cms_backend.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenExpired(Exception):
    """JWT signature is valid but the token has expired"""


class TokenInvalid(Exception):
    """JWT is malformed or signed with another key"""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None
) -> str:
    """Create JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode,
        secret_key or settings.SECRET_KEY,
        algorithm=algorithm or settings.ALGORITHM
    )
    return encoded_jwt


def decode_access_token(
    token: str,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None
) -> Dict[str, Any]:
    """
    Decode and verify JWT token.
    
    Raises:
        TokenExpired: If the token is past its exp claim
        TokenInvalid: If the token is malformed or the signature does not match
    """
    try:
        return jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[algorithm or settings.ALGORITHM]
        )
    except ExpiredSignatureError as e:
        raise TokenExpired(str(e)) from e
    except JWTError as e:
        raise TokenInvalid(str(e)) from e


def generate_reset_token() -> str:
    """Random single-use token (64 hex chars) sent to the user by email"""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    """
    Create SHA-256 hash of a token for lookup without storing the token.
    
    Args:
        token: Plain text token
    
    Returns:
        Hex string of SHA-256 hash (64 characters)
    """
    if not token:
        return ""
    
    return hashlib.sha256(token.encode()).hexdigest()
