from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import create_access_token, get_current_user
from app.core.exceptions import InactiveAccountError
from app.database import get_db
from app.models.user import User
from app.schemas.user import LoginRequest, TokenResponse, UserOut
from app.services.users import authenticate

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(
    dto: LoginRequest,
    db: Session = Depends(get_db),
):
    try:
        user = authenticate(db, dto.email, dto.password)
    except InactiveAccountError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return TokenResponse(token=create_access_token(user), user=UserOut.model_validate(user))


@router.get("/profile", response_model=UserOut)
def get_profile(
    user: User = Depends(get_current_user),
):
    return UserOut.model_validate(user)
