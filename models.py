# models.py

from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class Category(Base):
    __tablename__ = "categories"

    id = sa.Column(sa.Integer, primary_key=True, index=True)
    name = sa.Column(sa.String(225), nullable=False)
    description = sa.Column(sa.String(255), nullable=False, default="")
    parent_id = sa.Column(sa.Integer, sa.ForeignKey("categories.id"), nullable=True, index=True)
    created_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}', parent_id={self.parent_id})>"


class Post(Base):
    __tablename__ = "posts"

    id = sa.Column(sa.Integer, primary_key=True, index=True)
    title = sa.Column(sa.String(225), nullable=False, index=True)
    image = sa.Column(sa.String(255), nullable=False, default="")
    visibility = sa.Column(sa.Boolean, nullable=False, default=False)
    content = sa.Column(sa.Text, nullable=False, default="")
    category_id = sa.Column(sa.Integer, sa.ForeignKey("categories.id"), nullable=True, index=True)
    created_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<Post(id={self.id}, title='{self.title}')>"
