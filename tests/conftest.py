"""Pytest configuration and fixtures."""

import os
import threading
from collections.abc import Generator
from uuid import uuid4

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cafe_admin.db.models import Allergen, Base, Category, MenuItem
from cafe_admin.imports.store import StoreUnavailableError
from cafe_admin.menu.schemas import CategoryResponse, MenuItemResponse
from cafe_admin.menu.service import MenuService

# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    # Import here to ensure env vars are set
    from cafe_admin.dependencies import get_db
    from cafe_admin.main import app

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def menu_service(db: Session) -> MenuService:
    """Menu service bound to the test session."""
    return MenuService(db)


@pytest.fixture
def coffee_category(db: Session) -> Category:
    """Create the Coffee category."""
    category = Category(
        name="Coffee",
        name_es="Café",
        description="Hot and cold coffee drinks",
        display_order=1,
        is_active=True,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def pastry_category(db: Session) -> Category:
    """Create the Pastries category."""
    category = Category(
        name="Pastries",
        name_es="Pasteles",
        display_order=2,
        is_active=True,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def allergens(db: Session) -> list[Allergen]:
    """Create gluten and milk allergens."""
    items = [Allergen(name="Gluten", name_es="Gluten"), Allergen(name="Milk", name_es="Leche")]
    db.add_all(items)
    db.commit()
    for allergen in items:
        db.refresh(allergen)
    return items


@pytest.fixture
def croissant(db: Session, pastry_category: Category, allergens: list[Allergen]) -> MenuItem:
    """Create a croissant with allergens."""
    item = MenuItem(
        category_id=pastry_category.id,
        name="Croissant",
        name_es="Cruasán",
        description="Butter croissant, baked daily",
        price=2500,
        is_available=True,
        is_featured=True,
        display_order=1,
        allergens=allergens,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


class InMemoryStore:
    """Thread-safe in-memory store for exercising the import engine.

    Attributes:
        reject_names: Names whose create/update is rejected.
        unavailable_after: Number of store calls that succeed before every
            further call raises ``StoreUnavailableError``.
        calls: (operation, name) tuples in call order.
    """

    def __init__(self):
        self.categories = {}
        self.items = {}
        self.calls = []
        self.reject_names = set()
        self.unavailable_after = None
        self._lock = threading.Lock()

    def _check(self, operation, name):
        with self._lock:
            self.calls.append((operation, name))
            count = len(self.calls)
        if self.unavailable_after is not None and count > self.unavailable_after:
            raise StoreUnavailableError("connection refused")
        if name in self.reject_names:
            raise ValueError(f"Store rejected '{name}'")

    def create_category(self, data):
        self._check("create_category", data.name)
        record = CategoryResponse(id=str(uuid4()), **data.model_dump())
        with self._lock:
            self.categories[record.id] = record
        return record

    def update_category(self, category_id, data):
        self._check("update_category", data.name)
        with self._lock:
            record = self.categories[category_id].model_copy(
                update=data.model_dump(exclude_unset=True)
            )
            self.categories[category_id] = record
        return record

    def create_menu_item(self, data):
        self._check("create_menu_item", data.name)
        record = MenuItemResponse(id=str(uuid4()), **data.model_dump(exclude={"allergen_ids"}))
        with self._lock:
            self.items[record.id] = record
        return record

    def update_menu_item(self, item_id, data):
        self._check("update_menu_item", data.name)
        with self._lock:
            record = self.items[item_id].model_copy(
                update=data.model_dump(exclude_unset=True, exclude={"allergen_ids"})
            )
            self.items[item_id] = record
        return record


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def coffee() -> CategoryResponse:
    """Coffee category record for snapshots."""
    return CategoryResponse(id="cat-coffee", name="Coffee", name_es="Café", display_order=1)


@pytest.fixture
def pastries() -> CategoryResponse:
    """Pastries category record for snapshots."""
    return CategoryResponse(id="cat-pastries", name="Pastries", name_es="Pasteles", display_order=2)


@pytest.fixture
def make_store():
    """Factory for additional in-memory stores."""
    return InMemoryStore
