import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from recruitment.core.responses import ok
from recruitment.core.security import hash_password
from recruitment.database import get_db
from recruitment.dependencies import get_current_admin, get_current_user
from recruitment.models.user import ROLE_ADMIN, ROLE_APPLICANT, User
from recruitment.repos.user_repo import (
    create as create_user,
    delete_user,
    get_all_users,
    get_by_email,
    get_by_id,
    update as update_user,
)
from recruitment.schemas.auth import UserCreate, UserRegister, UserResponse, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    """Self-service signup. Always creates an applicant account."""
    try:
        if get_by_email(db, data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
        user = create_user(db, data.email, data.password, data.first_name, data.last_name, role=ROLE_APPLICANT)
        logger.info("Applicant registered: %s", user.email)
        return ok(UserResponse.model_validate(user), "Registration successful")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Register failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Registration failed") from e


@router.get("")
def list_users(
    role: str | None = None,
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    users = get_all_users(db, role=role.upper() if role else None)
    return ok([UserResponse.model_validate(u) for u in users])


@router.get("/{user_id}")
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    user = get_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return ok(UserResponse.model_validate(user))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_staff_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        if get_by_email(db, data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
        user = create_user(
            db,
            data.email,
            data.password,
            data.first_name,
            data.last_name,
            role=data.role,
            position=data.position,
        )
        logger.info("User %s created by admin %s with role %s", user.email, admin.email, user.role)
        return ok(UserResponse.model_validate(user), "User created successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Create user failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create user") from e


@router.put("/{user_id}")
def update_user_account(
    user_id: str,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    is_admin = current.role == ROLE_ADMIN
    if current.id != user_id and not is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only update your own account")
    if not is_admin and (data.role is not None or data.is_active is not None):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only administrators can change roles")
    try:
        if data.email is not None:
            other = get_by_email(db, data.email)
            if other and other.id != user_id:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
        user = update_user(
            db,
            user_id,
            email=data.email,
            password_hash=hash_password(data.password) if data.password else None,
            first_name=data.first_name,
            last_name=data.last_name,
            role=data.role,
            position=data.position,
            is_active=data.is_active,
        )
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        logger.info("User %s updated by %s", user_id, current.id)
        return ok(UserResponse.model_validate(user), "User updated successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Update failed for user=%s: %s", user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update user") from e


@router.delete("/{user_id}")
def delete_user_account(
    user_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    if user_id == admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    try:
        if not delete_user(db, user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        logger.info("User %s deleted by admin %s", user_id, admin.email)
        return ok(message="User deleted successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Delete failed for user=%s: %s", user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete user") from e
