from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from mappr.core.config import JWT_ALGORITHM, JWT_AUDIENCE, JWT_SECRET

router = APIRouter(prefix="/auth", tags=["authentication"])
security = HTTPBearer(auto_error=False)


class UserInfo(BaseModel):
    id: str
    email: str | None = None
    role: str | None = None


def decode_token(token: str) -> dict:
    """
    Verify a bearer token issued by the auth provider and return its claims.
    Audience is only checked when JWT_AUDIENCE is configured.
    """
    options = {"verify_aud": bool(JWT_AUDIENCE)}
    payload = jwt.decode(
        token, JWT_SECRET, algorithms=[JWT_ALGORITHM], audience=JWT_AUDIENCE, options=options
    )

    exp = payload.get("exp")
    if exp and datetime.utcnow().timestamp() > exp:
        raise HTTPException(status_code=401, detail="Token has expired")
    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Token has no subject")
    return payload


async def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        return decode_token(credentials.credentials)
    except HTTPException:
        raise
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid authentication token: {str(e)}")


async def get_current_user_id(claims: dict = Depends(get_token_claims)) -> str:
    """
    FastAPI dependency returning the authenticated user's id (`sub` claim)
    """
    return claims["sub"]


@router.get("/me", response_model=UserInfo)
async def get_current_user(claims: dict = Depends(get_token_claims)):
    """
    Return the identity carried by the bearer token.
    Frontend can call this on app load to check the session is still valid.
    """
    return UserInfo(id=claims["sub"], email=claims.get("email"), role=claims.get("role"))
