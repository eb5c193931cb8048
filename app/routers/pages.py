from typing import Optional, Dict, Any
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from app.db.session import get_session
from app.models.content import PageKey
from app.services.site import SiteService, FEATURES, RESELLER_PAGE

router = APIRouter()

def get_site_service(session: Session = Depends(get_session)) -> SiteService:
    return SiteService(session)

@router.get("/")
def landing_page(service: SiteService = Depends(get_site_service)) -> Dict[str, Any]:
    """Landing page: CTA links, features, social proof and latest articles"""
    return service.landing_page()

@router.get("/faq")
def faq_page(service: SiteService = Depends(get_site_service)):
    return {"title": "FAQ", "faqs": service.faqs(), "urls": service.urls()}

@router.get("/fitur/{feature}")
def feature_page(feature: str, service: SiteService = Depends(get_site_service)):
    if feature not in FEATURES:
        raise HTTPException(status_code=404, detail="Halaman tidak ditemukan")
    return {"key": feature, **FEATURES[feature], "urls": service.urls()}

@router.get("/syarat-ketentuan")
def terms_page(service: SiteService = Depends(get_site_service)):
    return service.page(PageKey.TERMS)

@router.get("/kebijakan-privasi")
def privacy_page(service: SiteService = Depends(get_site_service)):
    return service.page(PageKey.PRIVACY)

@router.get("/menjadi-reseller")
def reseller_page(service: SiteService = Depends(get_site_service)):
    return {**RESELLER_PAGE, "urls": service.urls()}

@router.get("/tentang-kami")
def about_page(service: SiteService = Depends(get_site_service)):
    return service.page(PageKey.ABOUT)

@router.get("/kontak")
def contact_page(service: SiteService = Depends(get_site_service)):
    return service.page(PageKey.CONTACT)

@router.get("/blog")
def blog_page(
    page: int = Query(1, ge=1),
    limit: int = Query(9, ge=1, le=50),
    category: Optional[str] = None,
    service: SiteService = Depends(get_site_service)
):
    """Published articles, newest first"""
    return service.blog_listing(page=page, limit=limit, category=category)

@router.get("/blog/{slug}")
def blog_post_page(slug: str, service: SiteService = Depends(get_site_service)):
    return service.blog_post(slug)
