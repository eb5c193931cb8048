from typing import Optional
from datetime import datetime, timezone
from enum import Enum
from pydantic import field_validator
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Text

class BlogStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"

class BlogCategory(SQLModel, table=True):
    __tablename__ = "blog_categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

class BlogPost(SQLModel, table=True):
    __tablename__ = "blog_posts"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Content
    title: str = Field(index=True)
    slug: str = Field(unique=True, index=True)  # URL-friendly title
    excerpt: str = ""  # Short summary shown on the blog listing
    content: str = Field(sa_column=Column(Text))  # Rich text (HTML)
    cover_image: str = ""

    # Categorization
    category: str = ""  # Name from blog_categories
    author: str = "Admin"

    # Publication
    status: BlogStatus = Field(default=BlogStatus.DRAFT, index=True)
    published_at: Optional[datetime] = Field(default=None, index=True)

    # SEO
    seo_title: str = ""
    meta_description: str = ""
    focus_keyword: str = ""

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class BlogPostInput(SQLModel):
    """Admin form payload for creating or updating a post."""
    title: str = ""
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    cover_image: str = ""
    category: str = ""
    author: str = ""
    status: BlogStatus = BlogStatus.DRAFT
    published_at: Optional[datetime] = None
    seo_title: str = ""
    meta_description: str = ""
    focus_keyword: str = ""

    @field_validator("published_at", mode="before")
    @classmethod
    def empty_published_at(cls, value):
        # datetime-local inputs post "" when cleared
        if value == "":
            return None
        return value

    @field_validator("published_at")
    @classmethod
    def naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Stored timestamps are naive UTC, like the created_at/updated_at columns
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
