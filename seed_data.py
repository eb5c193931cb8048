import logging
import os
from sqlmodel import Session, select
from app.core.logging import configure_logging
from app.db.session import engine, create_db_and_tables
from app.models import AdminRole, BlogCategory, FaqItem, UrlGroup
from app.services.auth import AuthService
from app.services.site import DEFAULT_FAQS
from app.services.urls import UrlService

logger = logging.getLogger("seed_data")

CATEGORIES = ["Tips Rapat", "Produk", "Berita", "Panduan"]

URL_GROUPS = [
    UrlGroup(id="1", name="Hero Section", items=[
        {"label": "Tombol CTA", "url": "https://rapatin.id/register"},
        {"label": "Tombol Harga", "url": "#pricing"},
    ]),
    UrlGroup(id="2", name="CTA Section", items=[
        {"label": "Tombol Daftar", "url": "https://rapatin.id/register"},
    ]),
    UrlGroup(id="3", name="Navbar", items=[
        {"label": "Tombol Masuk", "url": "https://rapatin.id/login"},
        {"label": "Tombol Daftar", "url": "https://rapatin.id/register"},
    ]),
    UrlGroup(id="4", name="Pricing Section", items=[
        {"label": "Tombol Jadwalkan", "url": "https://app.rapatin.id/register"},
    ]),
    UrlGroup(id="5", name="Dashboard Preview", items=[
        {"label": "Tombol Daftar", "url": "https://app.rapatin.id/register"},
    ]),
]

def seed():
    configure_logging()
    logger.info("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        if not session.exec(select(BlogCategory)).first():
            for name in CATEGORIES:
                session.add(BlogCategory(name=name))
            session.commit()
            logger.info("Seeded %d blog categories", len(CATEGORIES))

        if not session.exec(select(UrlGroup)).first():
            for group in URL_GROUPS:
                session.add(group)
            session.commit()
            UrlService(session).refresh_cache()
            logger.info("Seeded %d URL groups", len(URL_GROUPS))

        if not session.exec(select(FaqItem)).first():
            for index, faq in enumerate(DEFAULT_FAQS):
                session.add(FaqItem(question=faq["question"], answer=faq["answer"], sort_order=index))
            session.commit()
            logger.info("Seeded %d FAQ entries", len(DEFAULT_FAQS))

        email = os.environ.get("ADMIN_EMAIL")
        password = os.environ.get("ADMIN_PASSWORD")
        auth = AuthService(session)
        if email and password and not auth.get_user_by_email(email):
            auth.create_admin(email, password, name="Admin", role=AdminRole.SUPER_ADMIN)
            logger.info("Created super admin %s", email)
        elif not email or not password:
            logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping admin account")

if __name__ == "__main__":
    seed()
