from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from articles_api.database import Base


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------
class ArticleModel(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    # Assigned by the service layer, never by the database.
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
