import logging
import re
from datetime import datetime
from typing import List, Optional, Tuple
from fastapi import HTTPException
from sqlalchemy import func, desc, or_, and_
from sqlmodel import Session, select

from app.core.config import settings
from app.db.session import commit_or_raise
from app.models.blog import BlogPost, BlogCategory, BlogStatus, BlogPostInput

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")

def generate_slug(title: str) -> str:
    """Lowercase the title, drop punctuation and join words with hyphens.

    >>> generate_slug("Tips Rapat Online: 5 Cara Efektif!")
    'tips-rapat-online-5-cara-efektif'
    """
    slug = _NON_WORD.sub("", title.lower()).strip()
    return _WHITESPACE.sub("-", slug)

def resolve_published_at(status: BlogStatus, published_at: Optional[datetime]) -> Optional[datetime]:
    """Stamp the current time when a post goes out without a publish time."""
    if status == BlogStatus.PUBLISHED and published_at is None:
        return datetime.utcnow()
    return published_at

def visible_posts_clause(now: datetime):
    """Published posts, plus scheduled posts whose time has come."""
    return or_(
        BlogPost.status == BlogStatus.PUBLISHED,
        and_(
            BlogPost.status == BlogStatus.SCHEDULED,
            BlogPost.published_at.is_not(None),
            BlogPost.published_at <= now,
        ),
    )

class BlogService:
    def __init__(self, session: Session):
        self.session = session

    # Validation & form normalisation

    def validate(self, data: BlogPostInput):
        if not data.title.strip() or not data.content.strip():
            raise HTTPException(status_code=400, detail="Judul dan konten harus diisi")

    def default_category(self) -> str:
        first = self.session.exec(select(BlogCategory).order_by(BlogCategory.name)).first()
        return first.name if first else ""

    def _apply(self, post: BlogPost, data: BlogPostInput):
        # Must run before the post is modified, the query autoflushes
        category = data.category or self.default_category()
        slug = data.slug or generate_slug(data.title)
        if not slug:
            raise HTTPException(status_code=400, detail="Slug tidak dapat dibuat dari judul, isi slug secara manual")

        post.title = data.title
        post.slug = slug
        post.excerpt = data.excerpt
        post.content = data.content
        post.cover_image = data.cover_image
        post.category = category
        post.author = data.author or settings.DEFAULT_BLOG_AUTHOR
        post.status = data.status
        post.published_at = resolve_published_at(data.status, data.published_at)
        post.seo_title = data.seo_title or data.title
        post.meta_description = data.meta_description
        post.focus_keyword = data.focus_keyword

    def get_post(self, post_id: int) -> BlogPost:
        post = self.session.get(BlogPost, post_id)
        if not post:
            raise HTTPException(status_code=404, detail="Artikel tidak ditemukan")
        return post

    # Mutations

    def create_post(self, data: BlogPostInput) -> BlogPost:
        self.validate(data)

        post = BlogPost(title=data.title, slug="", content=data.content)
        self._apply(post, data)

        self.session.add(post)
        commit_or_raise(self.session, "membuat artikel", conflict_detail="Slug sudah digunakan artikel lain")
        self.session.refresh(post)
        logger.info("Created blog post %s (%s, %s)", post.id, post.slug, post.status.value)
        return post

    def update_post(self, post_id: int, data: BlogPostInput) -> BlogPost:
        self.validate(data)
        post = self.get_post(post_id)

        self._apply(post, data)
        post.updated_at = datetime.utcnow()

        self.session.add(post)
        commit_or_raise(self.session, "memperbarui artikel", conflict_detail="Slug sudah digunakan artikel lain")
        self.session.refresh(post)
        logger.info("Updated blog post %s (%s, %s)", post.id, post.slug, post.status.value)
        return post

    def publish_post(self, post_id: int) -> BlogPost:
        post = self.get_post(post_id)

        post.status = BlogStatus.PUBLISHED
        post.published_at = resolve_published_at(post.status, post.published_at)
        post.updated_at = datetime.utcnow()

        self.session.add(post)
        commit_or_raise(self.session, "mempublikasikan artikel")
        self.session.refresh(post)
        logger.info("Published blog post %s at %s", post.id, post.published_at)
        return post

    def unpublish_post(self, post_id: int) -> BlogPost:
        post = self.get_post(post_id)

        post.status = BlogStatus.DRAFT
        post.updated_at = datetime.utcnow()

        self.session.add(post)
        commit_or_raise(self.session, "membatalkan publikasi artikel")
        self.session.refresh(post)
        logger.info("Unpublished blog post %s", post.id)
        return post

    def delete_post(self, post_id: int):
        post = self.get_post(post_id)
        self.session.delete(post)
        commit_or_raise(self.session, "menghapus artikel")
        logger.info("Deleted blog post %s", post_id)

    # Queries

    def list_posts(
        self, page: int = 1, limit: int = 10, status: Optional[BlogStatus] = None
    ) -> Tuple[List[BlogPost], int]:
        query = select(BlogPost)
        count_query = select(func.count(BlogPost.id))
        if status is not None:
            query = query.where(BlogPost.status == status)
            count_query = count_query.where(BlogPost.status == status)

        total = self.session.exec(count_query).one()
        posts = self.session.exec(
            query.order_by(desc(BlogPost.created_at), desc(BlogPost.id))
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
        return posts, total

    def list_public_posts(
        self, page: int = 1, limit: int = 9, category: Optional[str] = None
    ) -> Tuple[List[BlogPost], int]:
        visible = visible_posts_clause(datetime.utcnow())
        query = select(BlogPost).where(visible)
        count_query = select(func.count(BlogPost.id)).where(visible)
        if category:
            query = query.where(BlogPost.category == category)
            count_query = count_query.where(BlogPost.category == category)

        total = self.session.exec(count_query).one()
        posts = self.session.exec(
            query.order_by(desc(BlogPost.published_at), desc(BlogPost.id))
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
        return posts, total

    def get_public_post(self, slug: str) -> BlogPost:
        post = self.session.exec(
            select(BlogPost).where(BlogPost.slug == slug).where(visible_posts_clause(datetime.utcnow()))
        ).first()
        if not post:
            raise HTTPException(status_code=404, detail="Artikel tidak ditemukan")
        return post

    def count_by_status(self) -> dict:
        rows = self.session.exec(
            select(BlogPost.status, func.count(BlogPost.id)).group_by(BlogPost.status)
        ).all()
        counts = {status.value: 0 for status in BlogStatus}
        for status, count in rows:
            counts[BlogStatus(status).value] = count
        return counts

    # Categories

    def list_categories(self) -> List[BlogCategory]:
        return self.session.exec(select(BlogCategory).order_by(BlogCategory.name)).all()

    def create_category(self, name: str) -> BlogCategory:
        name = name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Nama kategori harus diisi")

        category = BlogCategory(name=name)
        self.session.add(category)
        commit_or_raise(self.session, "membuat kategori", conflict_detail="Kategori sudah ada")
        self.session.refresh(category)
        return category

    def delete_category(self, category_id: int):
        category = self.session.get(BlogCategory, category_id)
        if not category:
            raise HTTPException(status_code=404, detail="Kategori tidak ditemukan")
        self.session.delete(category)
        commit_or_raise(self.session, "menghapus kategori")
