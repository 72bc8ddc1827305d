"""Menu API routes."""

from fastapi import APIRouter, HTTPException, status

from cafe_admin.dependencies import MenuServiceDep
from cafe_admin.menu.schemas import (
    AllergenCreate,
    AllergenResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
)
from cafe_admin.menu.service import MenuServiceError

router = APIRouter()


# --- Categories ---


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(service: MenuServiceDep) -> list[CategoryResponse]:
    """List all categories in menu order."""
    return [CategoryResponse.model_validate(c) for c in service.list_categories()]


@router.get("/categories/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, service: MenuServiceDep) -> CategoryResponse:
    """Get a category by ID.

    Raises:
        HTTPException: If category not found.
    """
    category = service.get_category(category_id)
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )
    return CategoryResponse.model_validate(category)


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(data: CategoryCreate, service: MenuServiceDep) -> CategoryResponse:
    """Create a new category.

    Args:
        data: Category creation data.
        service: Menu service.

    Returns:
        CategoryResponse: Created category.

    Raises:
        HTTPException: If category name already exists.
    """
    if service.find_category_by_name(data.name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Category '{data.name}' already exists",
        )
    return CategoryResponse.model_validate(service.create_category(data))


@router.put("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    service: MenuServiceDep,
) -> CategoryResponse:
    """Update a category.

    Raises:
        HTTPException: If category not found or name conflict.
    """
    category = service.get_category(category_id)
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )

    # Check for name conflict if name is being changed
    if data.name and data.name.lower() != category.name.lower():
        existing = service.find_category_by_name(data.name)
        if existing and existing.id != category_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Category '{data.name}' already exists",
            )

    return CategoryResponse.model_validate(service.update_category(category_id, data))


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: str, service: MenuServiceDep) -> None:
    """Delete a category without menu items.

    Raises:
        HTTPException: If category not found or still in use.
    """
    if not service.get_category(category_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )
    try:
        service.delete_category(category_id)
    except MenuServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# --- Menu items ---


@router.get("/items", response_model=list[MenuItemResponse])
async def list_menu_items(
    service: MenuServiceDep,
    category_id: str | None = None,
) -> list[MenuItemResponse]:
    """List menu items, optionally filtered by category."""
    return [MenuItemResponse.model_validate(i) for i in service.list_menu_items(category_id)]


@router.get("/items/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(item_id: str, service: MenuServiceDep) -> MenuItemResponse:
    """Get a menu item by ID.

    Raises:
        HTTPException: If menu item not found.
    """
    item = service.get_menu_item(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Menu item not found",
        )
    return MenuItemResponse.model_validate(item)


@router.post("/items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(data: MenuItemCreate, service: MenuServiceDep) -> MenuItemResponse:
    """Create a menu item.

    Raises:
        HTTPException: If the category or an allergen does not exist.
    """
    try:
        item = service.create_menu_item(data)
    except MenuServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MenuItemResponse.model_validate(item)


@router.put("/items/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: str,
    data: MenuItemUpdate,
    service: MenuServiceDep,
) -> MenuItemResponse:
    """Update a menu item.

    Raises:
        HTTPException: If the item is missing or the update is rejected.
    """
    if not service.get_menu_item(item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Menu item not found",
        )
    try:
        item = service.update_menu_item(item_id, data)
    except MenuServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MenuItemResponse.model_validate(item)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item(item_id: str, service: MenuServiceDep) -> None:
    """Delete a menu item.

    Raises:
        HTTPException: If menu item not found.
    """
    if not service.get_menu_item(item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Menu item not found",
        )
    service.delete_menu_item(item_id)


# --- Allergens ---


@router.get("/allergens", response_model=list[AllergenResponse])
async def list_allergens(service: MenuServiceDep) -> list[AllergenResponse]:
    """List allergens."""
    return [AllergenResponse.model_validate(a) for a in service.list_allergens()]


@router.post("/allergens", response_model=AllergenResponse, status_code=status.HTTP_201_CREATED)
async def create_allergen(data: AllergenCreate, service: MenuServiceDep) -> AllergenResponse:
    """Create an allergen.

    Raises:
        HTTPException: If the allergen name already exists.
    """
    try:
        allergen = service.create_allergen(data)
    except MenuServiceError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Allergen '{data.name}' already exists",
        )
    return AllergenResponse.model_validate(allergen)
