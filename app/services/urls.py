import copy
import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional, Any
from fastapi import HTTPException
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.core.config import settings
from app.db.session import commit_or_raise
from app.models.url import UrlGroup

logger = logging.getLogger(__name__)

# Fallback CTA targets used until the database (or its cached copy) says otherwise
DEFAULT_URLS: Dict[str, Dict[str, str]] = {
    "hero": {
        "cta_button": "https://rapatin.id/register",
        "pricing_button": "#pricing",
    },
    "cta": {
        "register_button": "https://rapatin.id/register",
    },
    "navbar": {
        "login_button": "https://rapatin.id/login",
        "register_button": "https://rapatin.id/register",
    },
    "pricing": {
        "schedule_button": "https://app.rapatin.id/register",
    },
    "dashboard": {
        "register_button": "https://app.rapatin.id/register",
    },
}

# Group id -> (section, slots filled from the group's items in order)
GROUP_SECTIONS: Dict[str, tuple] = {
    "1": ("hero", ["cta_button", "pricing_button"]),
    "2": ("cta", ["register_button"]),
    "3": ("navbar", ["login_button", "register_button"]),
    "4": ("pricing", ["schedule_button"]),
    "5": ("dashboard", ["register_button"]),
}

class UrlData(BaseModel):
    urls: Dict[str, Dict[str, str]]
    source: str  # "database", "cache" or "default"
    error: Optional[str] = None

class UrlItem(BaseModel):
    label: str
    url: str

def map_groups_to_urls(groups: List[Dict[str, Any]]) -> Dict[str, Dict[str, str]]:
    """Overlay URL groups onto a fresh copy of the defaults.

    Unknown group ids and groups with fewer items than their section needs
    are ignored.
    """
    urls = copy.deepcopy(DEFAULT_URLS)
    for group in groups:
        if not isinstance(group, dict):
            continue
        mapping = GROUP_SECTIONS.get(str(group.get("id")))
        items = group.get("items") or []
        if not mapping or not isinstance(items, list):
            continue
        section, slots = mapping
        if len(items) < len(slots):
            continue
        for slot, item in zip(slots, items):
            url = item.get("url") if isinstance(item, dict) else None
            if url:
                urls[section][slot] = url
    return urls

def group_to_dict(group: UrlGroup) -> Dict[str, Any]:
    return {"id": group.id, "name": group.name, "items": list(group.items or [])}

class UrlService:
    def __init__(self, session: Session, cache_path: Optional[str] = None):
        self.session = session
        self.cache_path = cache_path or settings.URL_CACHE_PATH

    # Local cache

    def read_cache(self) -> Optional[List[Dict[str, Any]]]:
        if not os.path.exists(self.cache_path):
            return None
        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable URL cache %s: %s", self.cache_path, e)
            return None
        groups = [group for group in data if isinstance(group, dict)] if isinstance(data, list) else []
        if not groups:
            logger.warning("Ignoring malformed URL cache %s", self.cache_path)
            return None
        return groups

    def write_cache(self, groups: List[Dict[str, Any]]):
        try:
            directory = os.path.dirname(self.cache_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.cache_path, "w", encoding="utf-8") as f:
                json.dump(groups, f, ensure_ascii=False, indent=2)
        except OSError as e:
            # The cache only backs up the database, a failed write is not fatal
            logger.warning("Could not write URL cache %s: %s", self.cache_path, e)

    # Retrieval

    def get_urls(self) -> UrlData:
        try:
            groups = [group_to_dict(g) for g in self.session.exec(select(UrlGroup)).all()]
        except SQLAlchemyError as e:
            logger.error("Error fetching URLs from database: %s", e)
            self.session.rollback()
            cached = self.read_cache()
            if cached:
                logger.info("Using URLs from local cache")
                return UrlData(urls=map_groups_to_urls(cached), source="cache", error=str(e))
            return UrlData(urls=copy.deepcopy(DEFAULT_URLS), source="default", error=str(e))

        if not groups:
            logger.warning("No URL data found in database, using defaults")
            return UrlData(urls=copy.deepcopy(DEFAULT_URLS), source="default")

        self.write_cache(groups)
        return UrlData(urls=map_groups_to_urls(groups), source="database")

    # Admin

    def list_groups(self) -> List[UrlGroup]:
        return self.session.exec(select(UrlGroup).order_by(UrlGroup.id)).all()

    def get_group(self, group_id: str) -> UrlGroup:
        group = self.session.get(UrlGroup, group_id)
        if not group:
            raise HTTPException(status_code=404, detail="Grup URL tidak ditemukan")
        return group

    def create_group(self, group_id: str, name: str, items: List[UrlItem]) -> UrlGroup:
        group = UrlGroup(id=group_id, name=name, items=[item.model_dump() for item in items])
        self.session.add(group)
        commit_or_raise(self.session, "membuat grup URL", conflict_detail="Grup URL sudah ada")
        self.session.refresh(group)
        self.refresh_cache()
        return group

    def update_group(self, group_id: str, items: List[UrlItem], name: Optional[str] = None) -> UrlGroup:
        group = self.get_group(group_id)

        section = GROUP_SECTIONS.get(group_id)
        if section and len(items) < len(section[1]):
            raise HTTPException(
                status_code=400,
                detail=f"Grup {group.name} membutuhkan minimal {len(section[1])} URL",
            )

        if name is not None:
            group.name = name
        group.items = [item.model_dump() for item in items]
        group.updated_at = datetime.utcnow()

        self.session.add(group)
        commit_or_raise(self.session, "memperbarui URL")
        self.session.refresh(group)
        logger.info("Updated URL group %s", group_id)
        self.refresh_cache()
        return group

    def refresh_cache(self):
        self.write_cache([group_to_dict(g) for g in self.list_groups()])
