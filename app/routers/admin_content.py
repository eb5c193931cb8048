from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from app.db.session import get_session
from app.models.admin_user import AdminUser
from app.models.content import (
    FaqItem, Testimonial, BrandLogo, PageKey,
    FaqItemInput, TestimonialInput, BrandLogoInput, PageContentInput,
)
from app.routers.auth import get_admin_user
from app.services.auth import check_permission
from app.services.content import ContentService, PageContentService

router = APIRouter()

def get_faq_service(session: Session = Depends(get_session)) -> ContentService:
    return ContentService(session, FaqItem, "FAQ")

def get_testimonial_service(session: Session = Depends(get_session)) -> ContentService:
    return ContentService(session, Testimonial, "Testimoni")

def get_brand_logo_service(session: Session = Depends(get_session)) -> ContentService:
    return ContentService(session, BrandLogo, "Logo brand")

def get_page_service(session: Session = Depends(get_session)) -> PageContentService:
    return PageContentService(session)

def require(admin_user: AdminUser, permission: str):
    if not check_permission(admin_user, permission):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

# FAQ
@router.get("/faq")
def get_faqs(
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_faq_service)
):
    require(admin_user, "faq.read")
    return service.list_items()

@router.post("/faq")
def create_faq(
    data: FaqItemInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_faq_service)
):
    require(admin_user, "faq.create")
    return service.create(data)

@router.put("/faq/{item_id}")
def update_faq(
    item_id: int,
    data: FaqItemInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_faq_service)
):
    require(admin_user, "faq.update")
    return service.update(item_id, data)

@router.delete("/faq/{item_id}")
def delete_faq(
    item_id: int,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_faq_service)
):
    require(admin_user, "faq.delete")
    service.delete(item_id)
    return {"message": "FAQ berhasil dihapus"}

# Testimonials
@router.get("/testimonials")
def get_testimonials(
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_testimonial_service)
):
    require(admin_user, "testimonials.read")
    return service.list_items()

@router.post("/testimonials")
def create_testimonial(
    data: TestimonialInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_testimonial_service)
):
    require(admin_user, "testimonials.create")
    return service.create(data)

@router.put("/testimonials/{item_id}")
def update_testimonial(
    item_id: int,
    data: TestimonialInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_testimonial_service)
):
    require(admin_user, "testimonials.update")
    return service.update(item_id, data)

@router.delete("/testimonials/{item_id}")
def delete_testimonial(
    item_id: int,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_testimonial_service)
):
    require(admin_user, "testimonials.delete")
    service.delete(item_id)
    return {"message": "Testimoni berhasil dihapus"}

# Brand logos
@router.get("/brand-logos")
def get_brand_logos(
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_brand_logo_service)
):
    require(admin_user, "brand_logos.read")
    return service.list_items()

@router.post("/brand-logos")
def create_brand_logo(
    data: BrandLogoInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_brand_logo_service)
):
    require(admin_user, "brand_logos.create")
    return service.create(data)

@router.put("/brand-logos/{item_id}")
def update_brand_logo(
    item_id: int,
    data: BrandLogoInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_brand_logo_service)
):
    require(admin_user, "brand_logos.update")
    return service.update(item_id, data)

@router.delete("/brand-logos/{item_id}")
def delete_brand_logo(
    item_id: int,
    admin_user: AdminUser = Depends(get_admin_user),
    service: ContentService = Depends(get_brand_logo_service)
):
    require(admin_user, "brand_logos.delete")
    service.delete(item_id)
    return {"message": "Logo brand berhasil dihapus"}

# About / contact / terms / privacy
@router.get("/pages/{key}")
def get_page_content(
    key: PageKey,
    admin_user: AdminUser = Depends(get_admin_user),
    service: PageContentService = Depends(get_page_service)
):
    require(admin_user, "pages.read")
    return service.get(key)

@router.put("/pages/{key}")
def save_page_content(
    key: PageKey,
    data: PageContentInput,
    admin_user: AdminUser = Depends(get_admin_user),
    service: PageContentService = Depends(get_page_service)
):
    require(admin_user, "pages.update")
    return service.upsert(key, data)
