"""
auth.py — Bearer token authentication

Verifies HS256 JSON Web Tokens issued by the user/admin login service and
exposes the decoded principal as a FastAPI dependency. Token issuance is not
part of this service.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

log = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    id: str
    email: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def decode_token(token: str, secret: str) -> Principal:
    """
    Raises:
        jwt.PyJWTError: If the token is malformed, expired, signed with another
            secret, or carries no `id` claim.
    """
    claims = jwt.decode(token, secret, algorithms=["HS256"], options={"require": ["id"]})
    return Principal(id=str(claims["id"]), email=claims.get("email"), role=claims.get("role"))


async def get_current_principal(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authorization token is required")
    try:
        return decode_token(credentials.credentials, request.app.state.settings.jwt_secret)
    except jwt.PyJWTError as e:
        log.warning(f"Rejected bearer token: {e}")
        raise HTTPException(status_code=401, detail="Unauthorized, invalid token")


async def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_admin:
        log.warning(f"Principal {principal.id} attempted an admin-only action.")
        raise HTTPException(status_code=403, detail="Admin privileges required")
    return principal
