import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from recruitment.core.responses import ok
from recruitment.core.security import create_access_token, verify_password
from recruitment.database import get_db
from recruitment.dependencies import get_current_user
from recruitment.models.user import User
from recruitment.repos.user_repo import get_by_email
from recruitment.schemas.auth import LoginRequest, Token, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/login")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = get_by_email(db, data.email)
        # Same answer for unknown email, wrong portal and wrong password
        if not user or user.role != data.role:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
        if not verify_password(data.password, user.password_hash):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is disabled")
        logger.info("User logged in: %s (%s)", user.email, user.role)
        token = create_access_token(user.id, role=user.role)
        return ok(Token(access_token=token, user=UserResponse.model_validate(user)))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed") from e


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    return ok(UserResponse.model_validate(user))
