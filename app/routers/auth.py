from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlmodel import Session, select
from jose import JWTError
from pydantic import BaseModel

from app.core.security import decode_access_token
from app.db.session import get_session
from app.models.user import User
from app.models.admin_user import AdminUser
from app.services.auth import AuthService

router = APIRouter()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/token")


class Token(BaseModel):
    access_token: str
    token_type: str

def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(session)

@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: AuthService = Depends(get_auth_service),
):
    """Admin login"""
    user, error_message = service.authenticate_admin(form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"access_token": service.issue_token(user), "token_type": "bearer"}

def get_current_user(token: str = Depends(oauth2_scheme), session: Session = Depends(get_session)) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = session.exec(select(User).where(User.email == username)).first()
    if user is None or not user.is_active:
        raise credentials_exception
    return user

def get_admin_user(current_user: User = Depends(get_current_user), session: Session = Depends(get_session)) -> AdminUser:
    """Get admin user with permissions check"""
    admin_user = session.exec(select(AdminUser).where(AdminUser.user_id == current_user.id)).first()
    if not admin_user:
        raise HTTPException(status_code=403, detail="Admin access required")

    if not admin_user.is_active:
        raise HTTPException(status_code=403, detail="Admin account is inactive")

    return admin_user
