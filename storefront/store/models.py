"""
Modèles ORM du stockage (SQLite, un seul fichier).
- orders: une ligne par session Checkout complétée (id = id de session Stripe).
- reviews: avis clients, id auto-incrémenté.
"""
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Column, Float, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now_iso() -> str:
    """Horodatage ISO-8601 UTC au format 2024-01-31T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True)  # id de session Checkout
    email = Column(String)
    items = Column(Text)  # "2 x Hot sauce, 1 x T-shirt"
    total = Column(Float)  # unités majeures (dollars)
    date = Column(String, index=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "items": self.items,
            "total": self.total,
            "date": self.date,
        }


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    date = Column(String)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text, "date": self.date}
