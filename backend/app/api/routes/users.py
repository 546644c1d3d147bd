"""User administration (admin only)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import require_roles
from app.core.exceptions import EmailAlreadyExistsError
from app.database import get_db
from app.models.user import User, UserRole
from app.schemas.base import MessageResponse
from app.schemas.user import PasswordUpdate, UserCreate, UserOut, UserUpdate
from app.services.users import (
    create_user,
    delete_user,
    get_all_users,
    get_user,
    update_password,
    update_user,
)

router = APIRouter(prefix="/users", tags=["users"])

admin_only = require_roles(UserRole.ADMIN)


@router.get("", response_model=list[UserOut])
def list_users(
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
) -> list[UserOut]:
    return [UserOut.model_validate(u) for u in get_all_users(db)]


@router.get("/{user_id}", response_model=UserOut)
def get_one(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
) -> UserOut:
    user = get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserOut.model_validate(user)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create(
    dto: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
) -> UserOut:
    try:
        user = create_user(db, dto)
    except EmailAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserOut.model_validate(user)


@router.put("/{user_id}", response_model=UserOut)
def update(
    user_id: int,
    dto: UserUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
) -> UserOut:
    try:
        user = update_user(db, user_id, dto.model_dump(exclude_unset=True))
    except EmailAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserOut.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete(
    user_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(admin_only),
) -> MessageResponse:
    if current.id == user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account",
        )
    if not delete_user(db, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return MessageResponse(message="User deleted successfully")


@router.patch("/{user_id}/password", response_model=MessageResponse)
def change_password(
    user_id: int,
    dto: PasswordUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
) -> MessageResponse:
    if not update_password(db, user_id, dto.password):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return MessageResponse(message="Password updated successfully")
