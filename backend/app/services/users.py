"""User administration, login and the default admin seed."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.exceptions import EmailAlreadyExistsError, InactiveAccountError
from app.models.user import User, UserRole
from app.schemas.user import UserCreate
from app.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"email", "full_name", "phone", "role", "is_active"})


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_all_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def create_user(db: Session, dto: UserCreate) -> User:
    if get_user_by_email(db, dto.email):
        raise EmailAlreadyExistsError("Email already exists")
    user = User(
        email=normalize_email(dto.email),
        password_hash=hash_password(dto.password),
        full_name=dto.full_name,
        phone=dto.phone,
        role=dto.role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User %s created with role %s", user.email, user.role.value)
    return user


def update_user(db: Session, user_id: int, data: dict[str, Any]) -> User | None:
    user = get_user(db, user_id)
    if not user:
        return None
    changes = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}
    if changes.get("email"):
        changes["email"] = normalize_email(changes["email"])
        existing = get_user_by_email(db, changes["email"])
        if existing and existing.id != user.id:
            raise EmailAlreadyExistsError("Email already exists")
    for field, value in changes.items():
        if value is not None or field == "phone":
            setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def update_password(db: Session, user_id: int, password: str) -> bool:
    user = get_user(db, user_id)
    if not user:
        return False
    user.password_hash = hash_password(password)
    db.commit()
    return True


def delete_user(db: Session, user_id: int) -> bool:
    user = get_user(db, user_id)
    if not user:
        return False
    db.delete(user)
    db.commit()
    logger.info("User %s deleted", user_id)
    return True


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if not user:
        logger.warning("Login failed for unknown email %s", normalize_email(email))
        return None
    if not user.is_active:
        raise InactiveAccountError("Account is inactive")
    if not verify_password(password, user.password_hash):
        logger.warning("Login failed for %s: bad password", user.email)
        return None
    return user


def seed_admin_if_missing(
    db: Session, email: str, password: str, full_name: str
) -> User | None:
    """Create the bootstrap admin unless a user with that email exists. Idempotent."""
    if get_user_by_email(db, email):
        return None
    user = User(
        email=normalize_email(email),
        password_hash=hash_password(password),
        full_name=full_name,
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Seeded admin user %s", user.email)
    return user
