"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from cafe_admin.config import Settings, get_settings
from cafe_admin.db.database import get_db
from cafe_admin.menu.service import MenuService


def get_menu_service(db: Annotated[Session, Depends(get_db)]) -> MenuService:
    """Get a menu service bound to the request's session.

    Args:
        db: Database session.

    Returns:
        MenuService: Service instance.
    """
    return MenuService(db)


# Type aliases for cleaner dependency injection
DbSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
MenuServiceDep = Annotated[MenuService, Depends(get_menu_service)]
