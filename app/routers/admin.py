from typing import List, Optional, Dict, Any
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, desc
from sqlmodel import Session, select
from pydantic import BaseModel

from app.db.session import get_session
from app.models.user import User
from app.models.blog import BlogPost, BlogStatus, BlogPostInput
from app.models.content import FaqItem, Testimonial, BrandLogo
from app.models.admin_user import AdminUser, AdminRole
from app.routers.auth import get_current_user, get_admin_user, get_auth_service
from app.services.auth import AuthService, check_permission
from app.services.blog import BlogService
from app.services.urls import UrlService, UrlItem

router = APIRouter()

# Pydantic models for requests/responses
class DashboardStats(BaseModel):
    totalBlogs: int
    publishedBlogs: int
    draftBlogs: int
    scheduledBlogs: int
    totalFaqs: int
    totalTestimonials: int
    totalBrandLogos: int
    recentPosts: List[Dict[str, Any]]

class AdminUserCreate(BaseModel):
    email: str
    password: str
    name: Optional[str] = None
    role: AdminRole = AdminRole.CONTENT_MANAGER
    permissions: List[str] = []

class AdminUserUpdate(BaseModel):
    role: Optional[AdminRole] = None
    permissions: Optional[List[str]] = None
    is_active: Optional[bool] = None

class CategoryCreate(BaseModel):
    name: str

class UrlGroupCreate(BaseModel):
    id: str
    name: str
    items: List[UrlItem]

class UrlGroupUpdate(BaseModel):
    name: Optional[str] = None
    items: List[UrlItem]

def get_blog_service(session: Session = Depends(get_session)) -> BlogService:
    return BlogService(session)

def get_url_service(session: Session = Depends(get_session)) -> UrlService:
    return UrlService(session)

@router.get("/me")
def get_current_admin(
    current_user: User = Depends(get_current_user),
    admin_user: AdminUser = Depends(get_admin_user)
):
    """Get current admin profile"""
    return {
        "id": current_user.id,
        "email": current_user.email,
        "name": current_user.name,
        "role": admin_user.role,
        "permissions": admin_user.permissions,
        "created_at": current_user.created_at,
        "updated_at": current_user.updated_at
    }

@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service),
    session: Session = Depends(get_session)
):
    """Counts and recent activity for the admin dashboard"""
    counts = service.count_by_status()

    recent_posts = session.exec(
        select(BlogPost).order_by(desc(BlogPost.updated_at)).limit(5)
    ).all()

    return DashboardStats(
        totalBlogs=sum(counts.values()),
        publishedBlogs=counts[BlogStatus.PUBLISHED.value],
        draftBlogs=counts[BlogStatus.DRAFT.value],
        scheduledBlogs=counts[BlogStatus.SCHEDULED.value],
        totalFaqs=session.exec(select(func.count(FaqItem.id))).one(),
        totalTestimonials=session.exec(select(func.count(Testimonial.id))).one(),
        totalBrandLogos=session.exec(select(func.count(BrandLogo.id))).one(),
        recentPosts=[
            {
                "id": post.id,
                "title": post.title,
                "status": post.status,
                "updated_at": post.updated_at.isoformat(),
            }
            for post in recent_posts
        ],
    )

# Blog CRUD endpoints
@router.get("/blogs")
def get_blogs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[BlogStatus] = None,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    """Get all blog posts, newest first"""
    if not check_permission(admin_user, "blogs.read"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    posts, total = service.list_posts(page=page, limit=limit, status=status)
    return {
        "blogs": posts,
        "total": total,
        "page": page,
        "pages": (total + limit - 1) // limit
    }

@router.get("/blogs/{blog_id}")
def get_blog(
    blog_id: int,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    if not check_permission(admin_user, "blogs.read"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.get_post(blog_id)

@router.post("/blogs")
def create_blog(
    data: BlogPostInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    """Create new blog post"""
    if not check_permission(admin_user, "blogs.create"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.create_post(data)

@router.put("/blogs/{blog_id}")
def update_blog(
    blog_id: int,
    data: BlogPostInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    """Update blog post"""
    if not check_permission(admin_user, "blogs.update"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.update_post(blog_id, data)

@router.put("/blogs/{blog_id}/publish")
def publish_blog(
    blog_id: int,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    """Publish blog post"""
    if not check_permission(admin_user, "blogs.update"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.publish_post(blog_id)

@router.put("/blogs/{blog_id}/unpublish")
def unpublish_blog(
    blog_id: int,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    """Move blog post back to draft"""
    if not check_permission(admin_user, "blogs.update"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.unpublish_post(blog_id)

@router.delete("/blogs/{blog_id}")
def delete_blog(
    blog_id: int,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    """Delete blog post"""
    if not check_permission(admin_user, "blogs.delete"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    service.delete_post(blog_id)
    return {"message": "Artikel berhasil dihapus"}

# Blog categories
@router.get("/blog-categories")
def get_blog_categories(
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    if not check_permission(admin_user, "blogs.read"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.list_categories()

@router.post("/blog-categories")
def create_blog_category(
    data: CategoryCreate,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    if not check_permission(admin_user, "blogs.create"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.create_category(data.name)

@router.delete("/blog-categories/{category_id}")
def delete_blog_category(
    category_id: int,
    admin_user: AdminUser = Depends(get_admin_user),
    service: BlogService = Depends(get_blog_service)
):
    if not check_permission(admin_user, "blogs.delete"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    service.delete_category(category_id)
    return {"message": "Kategori berhasil dihapus"}

# CTA URL groups
@router.get("/urls")
def get_url_groups(
    admin_user: AdminUser = Depends(get_admin_user),
    service: UrlService = Depends(get_url_service)
):
    if not check_permission(admin_user, "urls.read"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.list_groups()

@router.post("/urls")
def create_url_group(
    data: UrlGroupCreate,
    admin_user: AdminUser = Depends(get_admin_user),
    service: UrlService = Depends(get_url_service)
):
    if not check_permission(admin_user, "urls.create"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.create_group(data.id, data.name, data.items)

@router.put("/urls/{group_id}")
def update_url_group(
    group_id: str,
    data: UrlGroupUpdate,
    admin_user: AdminUser = Depends(get_admin_user),
    service: UrlService = Depends(get_url_service)
):
    if not check_permission(admin_user, "urls.update"):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return service.update_group(group_id, data.items, name=data.name)

# Admin user management
@router.post("/admin-users")
def create_admin_user(
    admin_data: AdminUserCreate,
    admin_user: AdminUser = Depends(get_admin_user),
    service: AuthService = Depends(get_auth_service)
):
    """Create new admin account (super admin only)"""
    if admin_user.role != AdminRole.SUPER_ADMIN:
        raise HTTPException(status_code=403, detail="Only super admins can create admin users")

    return service.create_admin(
        email=admin_data.email,
        password=admin_data.password,
        name=admin_data.name,
        role=admin_data.role,
        permissions=admin_data.permissions
    )

@router.get("/admin-users")
def get_admin_users(
    admin_user: AdminUser = Depends(get_admin_user),
    session: Session = Depends(get_session)
):
    """Get all admin users (super admin only)"""
    if admin_user.role != AdminRole.SUPER_ADMIN:
        raise HTTPException(status_code=403, detail="Only super admins can view admin users")

    return session.exec(select(AdminUser)).all()

@router.put("/admin-users/{admin_id}")
def update_admin_user(
    admin_id: int,
    admin_update: AdminUserUpdate,
    admin_user: AdminUser = Depends(get_admin_user),
    service: AuthService = Depends(get_auth_service)
):
    """Update admin user (super admin only)"""
    if admin_user.role != AdminRole.SUPER_ADMIN:
        raise HTTPException(status_code=403, detail="Only super admins can update admin users")

    return service.update_admin(
        admin_id,
        role=admin_update.role,
        permissions=admin_update.permissions,
        is_active=admin_update.is_active
    )
