from sqlalchemy import func
from sqlalchemy.orm import Session

from recruitment.models.user import User, ROLE_APPLICANT
from recruitment.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str = ROLE_APPLICANT,
    position: str | None = None,
) -> User:
    user = User(
        id=generate_id(),
        email=email.strip().lower(),
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
        position=position,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    email: str | None = None,
    password_hash: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    role: str | None = None,
    position: str | None = None,
    is_active: bool | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if email is not None:
        user.email = email.strip().lower()
    if password_hash is not None:
        user.password_hash = password_hash
    if first_name is not None:
        user.first_name = first_name
    if last_name is not None:
        user.last_name = last_name
    if role is not None:
        user.role = role
    if position is not None:
        user.position = position
    if is_active is not None:
        user.is_active = is_active
    db.commit()
    db.refresh(user)
    return user


def get_all_users(db: Session, role: str | None = None) -> list[User]:
    """List users newest first, optionally restricted to one role."""
    q = db.query(User).order_by(User.created_at.desc())
    if role:
        q = q.filter(User.role == role)
    return q.all()


def delete_user(db: Session, user_id: str) -> bool:
    """Delete user and dependent profile rows (CASCADE). Returns True if deleted."""
    user = get_by_id(db, user_id)
    if not user:
        return False
    db.delete(user)
    db.commit()
    return True
