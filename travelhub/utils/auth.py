"""
Authentication utilities - JWT verification for identity-provider tokens
"""
import logging
from datetime import datetime, timedelta
from typing import Optional, Dict

from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from travelhub.config.settings import settings

logger = logging.getLogger(__name__)

# JWT Bearer token
security = HTTPBearer()


def create_access_token(data: Dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token (local tooling and tests; production tokens come from the provider)"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict:
    """Decode and verify a JWT token"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning("JWT verification failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict:
    """Resolve the authenticated principal.

    The identity provider has already verified the user; we only check the
    signature and read the subject. The returned dict always has ``user_id``.
    """
    payload = decode_access_token(credentials.credentials)
    user_id = (payload.get("sub") or "").strip()
    if not user_id:
        logger.warning("Token rejected: no subject claim")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
    return {
        "user_id": user_id,
        "email": payload.get("email"),
        "name": payload.get("name"),
    }
