# Import all models to register them with SQLModel
from app.models.user import User
from app.models.admin_user import AdminUser, AdminRole
from app.models.blog import BlogPost, BlogCategory, BlogStatus, BlogPostInput
from app.models.url import UrlGroup
from app.models.content import (
    FaqItem, Testimonial, BrandLogo, PageContent, PageKey,
    FaqItemInput, TestimonialInput, BrandLogoInput, PageContentInput,
)

__all__ = [
    "User",
    "AdminUser",
    "AdminRole",
    "BlogPost",
    "BlogCategory",
    "BlogStatus",
    "BlogPostInput",
    "UrlGroup",
    "FaqItem",
    "Testimonial",
    "BrandLogo",
    "PageContent",
    "PageKey",
    "FaqItemInput",
    "TestimonialInput",
    "BrandLogoInput",
    "PageContentInput",
]
