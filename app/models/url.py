from typing import List, Dict
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import JSON

class UrlGroup(SQLModel, table=True):
    """A labeled group of CTA links, e.g. the navbar login/register buttons."""
    __tablename__ = "urls"

    # Fixed keys "1".."5", each bound to a page section
    id: str = Field(primary_key=True)
    name: str

    # Ordered list of {"label": ..., "url": ...}
    items: List[Dict[str, str]] = Field(default=[], sa_column=Column(JSON))

    updated_at: datetime = Field(default_factory=datetime.utcnow)
