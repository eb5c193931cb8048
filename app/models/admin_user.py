from typing import Optional, List
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import JSON
from enum import Enum

class AdminRole(str, Enum):
    SUPER_ADMIN = "super_admin"  # Full access, including admin accounts
    CONTENT_MANAGER = "content_manager"  # Blog, URLs, FAQ, testimonials, logos, pages
    VIEWER = "viewer"  # Read only

# Content areas managed from the admin panel
CONTENT_AREAS = ["blogs", "urls", "faq", "testimonials", "brand_logos", "pages", "uploads"]

ROLE_PERMISSIONS = {
    AdminRole.CONTENT_MANAGER: [
        f"{area}.{action}"
        for area in CONTENT_AREAS
        for action in ("read", "create", "update", "delete")
    ],
    AdminRole.VIEWER: [f"{area}.read" for area in CONTENT_AREAS],
}

class AdminUser(SQLModel, table=True):
    __tablename__ = "admin_users"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Link to main User table
    user_id: int = Field(foreign_key="users.id", unique=True, index=True)

    # Role & Permissions
    role: AdminRole = Field(default=AdminRole.VIEWER)

    # Granular permissions on top of the role, e.g. ["blogs.create", "urls.update"]
    permissions: List[str] = Field(default=[], sa_column=Column(JSON))

    # Status
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
