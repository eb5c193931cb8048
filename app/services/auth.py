import logging
from datetime import datetime
from typing import Optional, List
from sqlalchemy import func
from sqlmodel import Session, select
from fastapi import HTTPException

from app.core.security import get_password_hash, verify_password, create_access_token
from app.db.session import commit_or_raise
from app.models.user import User
from app.models.admin_user import AdminUser, AdminRole, ROLE_PERMISSIONS

logger = logging.getLogger(__name__)

def check_permission(admin_user: AdminUser, permission: str) -> bool:
    """Check if admin user has specific permission"""
    if admin_user.role == AdminRole.SUPER_ADMIN:
        return True

    if permission in ROLE_PERMISSIONS.get(admin_user.role, []):
        return True

    # Check granular permissions
    return permission in (admin_user.permissions or [])

class AuthService:
    def __init__(self, session: Session):
        self.session = session

    def get_user_by_email(self, email: str) -> Optional[User]:
        # Case-insensitive, without LIKE wildcards
        return self.session.exec(select(User).where(User.email == email)).first() or \
               self.session.exec(select(User).where(func.lower(User.email) == email.lower())).first()

    def get_admin_for_user(self, user: User) -> Optional[AdminUser]:
        return self.session.exec(select(AdminUser).where(AdminUser.user_id == user.id)).first()

    def authenticate_admin(self, email: str, password: str) -> tuple[Optional[User], Optional[str]]:
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed admin login for %s", email)
            return None, "Email atau kata sandi salah"
        if not user.is_active:
            return None, "Akun tidak aktif"

        admin_user = self.get_admin_for_user(user)
        if not admin_user or not admin_user.is_active:
            logger.info("Login by non-admin account %s rejected", email)
            return None, "Akun ini tidak memiliki akses admin"
        return user, None

    def issue_token(self, user: User) -> str:
        return create_access_token(data={"sub": user.email})

    def create_admin(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        role: AdminRole = AdminRole.CONTENT_MANAGER,
        permissions: Optional[List[str]] = None,
    ) -> AdminUser:
        if self.get_user_by_email(email):
            raise HTTPException(status_code=400, detail="Email sudah terdaftar")

        user = User(email=email, name=name, password_hash=get_password_hash(password))
        self.session.add(user)
        commit_or_raise(self.session, "membuat pengguna", conflict_detail="Email sudah terdaftar")
        self.session.refresh(user)

        admin_user = AdminUser(user_id=user.id, role=role, permissions=permissions or [])
        self.session.add(admin_user)
        commit_or_raise(self.session, "membuat admin")
        self.session.refresh(admin_user)
        logger.info("Created %s admin %s", role.value, email)
        return admin_user

    def update_admin(
        self,
        admin_id: int,
        role: Optional[AdminRole] = None,
        permissions: Optional[List[str]] = None,
        is_active: Optional[bool] = None,
    ) -> AdminUser:
        target_admin = self.session.get(AdminUser, admin_id)
        if not target_admin:
            raise HTTPException(status_code=404, detail="Admin tidak ditemukan")

        if role is not None:
            target_admin.role = role
        if permissions is not None:
            target_admin.permissions = permissions
        if is_active is not None:
            target_admin.is_active = is_active

        target_admin.updated_at = datetime.utcnow()
        self.session.add(target_admin)
        commit_or_raise(self.session, "memperbarui admin")
        self.session.refresh(target_admin)
        return target_admin
