from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime
from app.db.database import Base

DEFAULT_DESCRIPTION = "No description provided"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "Products"
    # SQLite would otherwise hand out the id of a deleted last row again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    description = Column(String(255), nullable=True)
    category = Column(String(255), nullable=False)
    # Column names shared with the existing Products table
    created_at = Column("createdAt", DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column("updatedAt", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r}>"
