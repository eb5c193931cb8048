import logging
from datetime import datetime
from typing import Generic, List, Type, TypeVar
from fastapi import HTTPException
from sqlmodel import Session, SQLModel, select

from app.db.session import commit_or_raise
from app.models.content import PageContent, PageKey, PageContentInput

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)

class ContentService(Generic[ModelT]):
    """CRUD for the flat, ordered content lists (FAQ, testimonials, brand logos)."""

    def __init__(self, session: Session, model: Type[ModelT], label: str):
        self.session = session
        self.model = model
        self.label = label  # User-facing name used in messages

    def list_items(self, active_only: bool = False) -> List[ModelT]:
        query = select(self.model)
        if active_only:
            query = query.where(self.model.is_active == True)
        return self.session.exec(query.order_by(self.model.sort_order, self.model.id)).all()

    def get(self, item_id: int) -> ModelT:
        item = self.session.get(self.model, item_id)
        if not item:
            raise HTTPException(status_code=404, detail=f"{self.label} tidak ditemukan")
        return item

    def create(self, data: SQLModel) -> ModelT:
        item = self.model(**data.model_dump())
        self.session.add(item)
        commit_or_raise(self.session, f"menambahkan {self.label.lower()}")
        self.session.refresh(item)
        logger.info("Created %s %s", self.model.__tablename__, item.id)
        return item

    def update(self, item_id: int, data: SQLModel) -> ModelT:
        item = self.get(item_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(item, field, value)
        item.updated_at = datetime.utcnow()

        self.session.add(item)
        commit_or_raise(self.session, f"memperbarui {self.label.lower()}")
        self.session.refresh(item)
        logger.info("Updated %s %s", self.model.__tablename__, item.id)
        return item

    def delete(self, item_id: int):
        item = self.get(item_id)
        self.session.delete(item)
        commit_or_raise(self.session, f"menghapus {self.label.lower()}")
        logger.info("Deleted %s %s", self.model.__tablename__, item_id)


class PageContentService:
    def __init__(self, session: Session):
        self.session = session

    def get(self, key: PageKey) -> PageContent:
        page = self.session.get(PageContent, key)
        if not page:
            raise HTTPException(status_code=404, detail="Konten halaman belum diatur")
        return page

    def upsert(self, key: PageKey, data: PageContentInput) -> PageContent:
        page = self.session.get(PageContent, key)
        if not page:
            page = PageContent(key=key, title=data.title)

        page.title = data.title
        page.content = data.content
        page.extra = dict(data.extra)
        page.updated_at = datetime.utcnow()

        self.session.add(page)
        commit_or_raise(self.session, "menyimpan konten halaman")
        self.session.refresh(page)
        logger.info("Saved page content %s", key.value)
        return page
