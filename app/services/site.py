"""Public page data.

Everything shown on the marketing site is read from the database first and
falls back to the static copy below when the read fails or nothing has been
entered yet, so a page never renders empty.
"""
import logging
from typing import Any, Callable, Dict, List, Optional
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.config import settings
from app.models.blog import BlogPost
from app.models.content import FaqItem, Testimonial, BrandLogo, PageContent, PageKey
from app.services.blog import BlogService
from app.services.content import ContentService
from app.services.urls import UrlService

logger = logging.getLogger(__name__)

DEFAULT_FAQS = [
    {
        "question": "Apa itu Rapatin?",
        "answer": "Rapatin adalah layanan penjadwalan rapat online berbasis Zoom tanpa perlu berlangganan akun Zoom Pro sendiri.",
    },
    {
        "question": "Bagaimana sistem pembayarannya?",
        "answer": "Anda cukup membayar sesuai pemakaian, per rapat dan sesuai jumlah peserta yang dibutuhkan.",
    },
    {
        "question": "Apakah rekaman rapat bisa disimpan?",
        "answer": "Bisa. Rekaman rapat disimpan di cloud dan dapat diunduh dari dashboard.",
    },
]

DEFAULT_TESTIMONIALS = [
    {
        "name": "Pengguna Rapatin",
        "role": "Event Organizer",
        "company": None,
        "quote": "Jadwal rapat jadi lebih mudah, cukup bayar saat butuh saja.",
        "avatar_url": None,
        "rating": 5,
    },
]

DEFAULT_PAGES: Dict[PageKey, Dict[str, Any]] = {
    PageKey.ABOUT: {
        "title": "Tentang Kami",
        "content": "Rapatin membantu tim dan komunitas menjadwalkan rapat online dengan biaya sesuai pemakaian.",
        "extra": {},
    },
    PageKey.CONTACT: {
        "title": "Kontak",
        "content": "Hubungi tim kami untuk pertanyaan seputar layanan Rapatin.",
        "extra": {"email": "halo@rapatin.id", "whatsapp": "", "address": "Jakarta, Indonesia"},
    },
    PageKey.TERMS: {
        "title": "Syarat dan Ketentuan",
        "content": "Dengan menggunakan layanan Rapatin, Anda menyetujui syarat dan ketentuan yang berlaku.",
        "extra": {},
    },
    PageKey.PRIVACY: {
        "title": "Kebijakan Privasi",
        "content": "Rapatin menjaga kerahasiaan data pribadi pengguna sesuai peraturan yang berlaku.",
        "extra": {},
    },
}

FEATURES: Dict[str, Dict[str, Any]] = {
    "bayar-sesuai-pakai": {
        "title": "Bayar Sesuai Pakai",
        "description": "Tanpa langganan bulanan. Bayar hanya untuk rapat yang Anda jadwalkan.",
        "highlights": ["Tanpa biaya langganan", "Harga sesuai jumlah peserta", "Saldo tidak hangus"],
    },
    "dashboard": {
        "title": "Dashboard",
        "description": "Kelola semua jadwal rapat, link, dan peserta dari satu tempat.",
        "highlights": ["Jadwal rapat terpusat", "Riwayat transaksi", "Pengaturan rapat instan"],
    },
    "rekaman-cloud": {
        "title": "Rekaman Cloud",
        "description": "Rekaman rapat otomatis tersimpan di cloud dan siap diunduh.",
        "highlights": ["Rekam otomatis", "Unduh kapan saja", "Bagikan ke peserta"],
    },
    "laporan-peserta": {
        "title": "Laporan Peserta",
        "description": "Lihat siapa saja yang hadir dan berapa lama mereka mengikuti rapat.",
        "highlights": ["Daftar hadir otomatis", "Durasi kehadiran", "Ekspor laporan"],
    },
}

RESELLER_PAGE = {
    "title": "Menjadi Reseller",
    "content": "Bergabunglah sebagai reseller Rapatin dan dapatkan komisi dari setiap rapat yang dijadwalkan pelanggan Anda.",
    "benefits": ["Harga khusus reseller", "Dashboard reseller", "Dukungan tim Rapatin"],
}

def post_summary(post: BlogPost) -> Dict[str, Any]:
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "cover_image": post.cover_image,
        "category": post.category,
        "author": post.author,
        "published_at": post.published_at.isoformat() if post.published_at else None,
        "url": f"{settings.SITE_URL}/blog/{post.slug}",
    }

def post_detail(post: BlogPost) -> Dict[str, Any]:
    data = post_summary(post)
    data.update({
        "content": post.content,
        "seo": {
            "title": post.seo_title or post.title,
            "meta_description": post.meta_description or post.excerpt,
            "focus_keyword": post.focus_keyword,
            "canonical_url": data["url"],
        },
    })
    return data

class SiteService:
    def __init__(self, session: Session):
        self.session = session

    def _read(self, what: str, fetch: Callable[[], List[Any]], fallback: List[Any]) -> List[Any]:
        try:
            rows = fetch()
        except SQLAlchemyError as e:
            logger.warning("Error fetching %s, using static content: %s", what, e)
            self.session.rollback()
            return fallback
        return rows or fallback

    def faqs(self) -> List[Dict[str, Any]]:
        service = ContentService(self.session, FaqItem, "FAQ")
        return self._read(
            "FAQ",
            lambda: [
                {"question": item.question, "answer": item.answer}
                for item in service.list_items(active_only=True)
            ],
            DEFAULT_FAQS,
        )

    def testimonials(self) -> List[Dict[str, Any]]:
        service = ContentService(self.session, Testimonial, "Testimoni")
        return self._read(
            "testimonials",
            lambda: [
                {
                    "name": item.name,
                    "role": item.role,
                    "company": item.company,
                    "quote": item.quote,
                    "avatar_url": item.avatar_url,
                    "rating": item.rating,
                }
                for item in service.list_items(active_only=True)
            ],
            DEFAULT_TESTIMONIALS,
        )

    def brand_logos(self) -> List[Dict[str, Any]]:
        service = ContentService(self.session, BrandLogo, "Logo brand")
        return self._read(
            "brand logos",
            lambda: [
                {"name": item.name, "logo_url": item.logo_url, "website_url": item.website_url}
                for item in service.list_items(active_only=True)
            ],
            [],
        )

    def recent_posts(self, limit: int = 3) -> List[Dict[str, Any]]:
        return self._read(
            "recent blog posts",
            lambda: [post_summary(p) for p in BlogService(self.session).list_public_posts(limit=limit)[0]],
            [],
        )

    def page(self, key: PageKey) -> Dict[str, Any]:
        default = DEFAULT_PAGES[key]
        try:
            page: Optional[PageContent] = self.session.get(PageContent, key)
        except SQLAlchemyError as e:
            logger.warning("Error fetching %s page, using static content: %s", key.value, e)
            self.session.rollback()
            page = None
        if not page:
            return {"key": key.value, **default}
        return {
            "key": key.value,
            "title": page.title or default["title"],
            "content": page.content or default["content"],
            "extra": {**default["extra"], **(page.extra or {})},
        }

    def blog_listing(self, page: int = 1, limit: int = 9, category: Optional[str] = None) -> Dict[str, Any]:
        service = BlogService(self.session)
        try:
            posts, total = service.list_public_posts(page=page, limit=limit, category=category)
            categories = [c.name for c in service.list_categories()]
        except SQLAlchemyError as e:
            logger.warning("Error fetching blog posts, showing an empty listing: %s", e)
            self.session.rollback()
            posts, total, categories = [], 0, []
        return {
            "posts": [post_summary(post) for post in posts],
            "categories": categories,
            "total": total,
            "page": page,
            "pages": (total + limit - 1) // limit
        }

    def blog_post(self, slug: str) -> Dict[str, Any]:
        try:
            post = BlogService(self.session).get_public_post(slug)
        except SQLAlchemyError as e:
            logger.warning("Error fetching blog post %s: %s", slug, e)
            self.session.rollback()
            raise HTTPException(status_code=503, detail="Artikel sedang tidak dapat dimuat")
        return post_detail(post)

    def urls(self) -> Dict[str, Dict[str, str]]:
        return UrlService(self.session).get_urls().urls

    def landing_page(self) -> Dict[str, Any]:
        return {
            "urls": self.urls(),
            "features": [{"key": key, "title": f["title"], "description": f["description"]} for key, f in FEATURES.items()],
            "testimonials": self.testimonials(),
            "brand_logos": self.brand_logos(),
            "recent_posts": self.recent_posts(),
            "faqs": self.faqs(),
        }
