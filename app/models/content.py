from typing import Optional, Dict, Any
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import JSON, Text

class FaqItem(SQLModel, table=True):
    __tablename__ = "faq_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    question: str
    answer: str = Field(sa_column=Column(Text))
    sort_order: int = Field(default=0, index=True)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class Testimonial(SQLModel, table=True):
    __tablename__ = "testimonials"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    role: Optional[str] = None  # Job title
    company: Optional[str] = None
    quote: str = Field(sa_column=Column(Text))
    avatar_url: Optional[str] = None
    rating: int = Field(default=5, ge=1, le=5)
    sort_order: int = Field(default=0, index=True)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class BrandLogo(SQLModel, table=True):
    __tablename__ = "brand_logos"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    logo_url: str
    website_url: Optional[str] = None
    sort_order: int = Field(default=0, index=True)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class PageKey(str, Enum):
    ABOUT = "about"
    CONTACT = "contact"
    TERMS = "terms"
    PRIVACY = "privacy"

class PageContent(SQLModel, table=True):
    """Editable text block behind the about/contact/terms/privacy pages."""
    __tablename__ = "page_contents"

    key: PageKey = Field(primary_key=True)
    title: str
    content: str = Field(default="", sa_column=Column(Text))

    # Structured extras, e.g. contact email/phone/address or a mission statement
    extra: Dict[str, Any] = Field(default={}, sa_column=Column(JSON))

    updated_at: datetime = Field(default_factory=datetime.utcnow)

# Admin form payloads

class FaqItemInput(SQLModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    sort_order: int = 0
    is_active: bool = True

class TestimonialInput(SQLModel):
    name: str = Field(min_length=1)
    role: Optional[str] = None
    company: Optional[str] = None
    quote: str = Field(min_length=1)
    avatar_url: Optional[str] = None
    rating: int = Field(default=5, ge=1, le=5)
    sort_order: int = 0
    is_active: bool = True

class BrandLogoInput(SQLModel):
    name: str = Field(min_length=1)
    logo_url: str = Field(min_length=1)
    website_url: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True

class PageContentInput(SQLModel):
    title: str = Field(min_length=1)
    content: str = ""
    extra: Dict[str, Any] = {}
