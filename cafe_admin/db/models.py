"""SQLAlchemy database models."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.mysql import CHAR
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys.

    Returns:
        str: UUID as 36-character string.
    """
    return str(uuid4())


class Category(Base):
    """Menu category (Coffee, Pastries, ...).

    Attributes:
        id: Primary key UUID.
        name: Category name in the primary locale.
        name_es: Spanish name.
        description: Optional description.
        description_es: Optional Spanish description.
        display_order: Position on the menu.
        is_active: Whether the category is shown.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "categories"
    __table_args__ = (Index("ix_categories_display_order", "display_order"),)

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_es: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_es: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    items: Mapped[list["MenuItem"]] = relationship("MenuItem", back_populates="category")


class Allergen(Base):
    """Allergen that can be attached to menu items.

    Attributes:
        id: Primary key UUID.
        name: Allergen name.
        name_es: Spanish name.
        icon: Optional icon identifier.
    """

    __tablename__ = "allergens"

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    name_es: Mapped[str | None] = mapped_column(String(100), nullable=True)
    icon: Mapped[str | None] = mapped_column(String(50), nullable=True)


class MenuItem(Base):
    """Menu item sold by the cafe.

    Attributes:
        id: Primary key UUID.
        category_id: FK to category.
        name: Item name in the primary locale.
        name_es: Spanish name.
        description: Optional description.
        description_es: Optional Spanish description.
        price: Price in the local currency.
        image_url: Optional image URL.
        is_available: Whether the item can currently be ordered.
        is_featured: Whether the item is highlighted on the menu.
        display_order: Position inside its category.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "menu_items"
    __table_args__ = (Index("ix_menu_items_category_id", "category_id"),)

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    category_id: Mapped[str] = mapped_column(
        CHAR(36), ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    name_es: Mapped[str | None] = mapped_column(String(150), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_es: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, default=0)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="items")
    allergens: Mapped[list["Allergen"]] = relationship(
        "Allergen", secondary="menu_item_allergens", order_by="Allergen.name"
    )


class MenuItemAllergen(Base):
    """Association table for MenuItem-Allergen many-to-many relationship."""

    __tablename__ = "menu_item_allergens"

    menu_item_id: Mapped[str] = mapped_column(
        CHAR(36),
        ForeignKey("menu_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    allergen_id: Mapped[str] = mapped_column(
        CHAR(36),
        ForeignKey("allergens.id", ondelete="CASCADE"),
        primary_key=True,
    )
