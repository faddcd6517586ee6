"""
SQLAlchemy ORM models for persistent storage.

Models mirror the dataclass models but add database persistence.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CollectionDB(Base):
    """
    A named card collection stored in the database.

    Each user may own many collections; each collection holds imported card rows.
    """

    __tablename__ = "collections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Relationship to card rows
    cards: Mapped[list["CollectionCardDB"]] = relationship(
        back_populates="collection", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<CollectionDB(id={self.id}, name={self.name}, user_id={self.user_id})>"


class CollectionCardDB(Base):
    """
    Individual card row within a collection.

    Rows are kept as imported: one per card printing line in the source CSV.
    """

    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("collections.id", ondelete="CASCADE"), index=True
    )
    card_name: Mapped[str] = mapped_column(String(255), index=True)
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    set_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    collector_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Relationship back to collection
    collection: Mapped["CollectionDB"] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<CollectionCardDB(card={self.card_name}, qty={self.quantity})>"
