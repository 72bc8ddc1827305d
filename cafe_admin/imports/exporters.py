"""CSV exports and import templates for the menu."""

from typing import Any

from cafe_admin.imports.codec import encode_csv

CATEGORY_EXPORT_COLUMNS = [
    "id",
    "name",
    "name_es",
    "description",
    "description_es",
    "display_order",
    "is_active",
]

CATEGORY_TEMPLATE_COLUMNS = [
    "name",
    "name_es",
    "description",
    "description_es",
    "display_order",
    "is_active",
]

MENU_ITEM_EXPORT_COLUMNS = [
    "id",
    "category_id",
    "category_name",
    "name",
    "name_es",
    "description",
    "description_es",
    "price",
    "image_url",
    "is_available",
    "is_featured",
    "display_order",
    "allergens",
]

MENU_ITEM_TEMPLATE_COLUMNS = [
    "name",
    "name_es",
    "category_name",
    "description",
    "description_es",
    "price",
    "image_url",
    "is_available",
    "is_featured",
    "display_order",
]

# Allergen names must not contain this character
ALLERGEN_SEPARATOR = ";"

CATEGORY_TEMPLATE_EXAMPLE = [
    "Coffee",
    "Café",
    "Hot and cold coffee drinks",
    "Bebidas de café calientes y frías",
    "1",
    "true",
]

MENU_ITEM_TEMPLATE_EXAMPLE = [
    "Cappuccino",
    "Capuchino",
    "Coffee",
    "Classic Italian coffee with steamed milk foam",
    "Café italiano clásico con espuma de leche",
    "3500",
    "",
    "true",
    "false",
    "1",
]


def _text(value: str | None) -> str:
    return value or ""


def _flag(value: bool) -> str:
    return "true" if value else "false"


def format_price(price: float) -> str:
    """Render a price without a trailing ".0" for whole amounts."""
    if float(price).is_integer():
        return str(int(price))
    return str(price)


def export_categories(categories: list[Any]) -> str:
    """Export categories as CSV.

    Args:
        categories: Category records (ORM rows or response schemas).

    Returns:
        str: CSV with ``CATEGORY_EXPORT_COLUMNS``.
    """
    rows = [
        [
            category.id,
            category.name,
            _text(category.name_es),
            _text(category.description),
            _text(category.description_es),
            str(category.display_order),
            _flag(category.is_active),
        ]
        for category in categories
    ]
    return encode_csv(CATEGORY_EXPORT_COLUMNS, rows)


def export_menu_items(items: list[Any], categories: list[Any]) -> str:
    """Export menu items as CSV.

    The category name is looked up from ``categories`` (blank when the
    category is unknown) and allergen names are joined with ``;``.

    Args:
        items: Menu item records with their allergens.
        categories: Category records.

    Returns:
        str: CSV with ``MENU_ITEM_EXPORT_COLUMNS``.
    """
    category_names = {category.id: category.name for category in categories}
    rows = [
        [
            item.id,
            item.category_id,
            category_names.get(item.category_id, ""),
            item.name,
            _text(item.name_es),
            _text(item.description),
            _text(item.description_es),
            format_price(item.price),
            _text(item.image_url),
            _flag(item.is_available),
            _flag(item.is_featured),
            str(item.display_order),
            ALLERGEN_SEPARATOR.join(allergen.name for allergen in item.allergens),
        ]
        for item in items
    ]
    return encode_csv(MENU_ITEM_EXPORT_COLUMNS, rows)


def category_template() -> str:
    """CSV template for category imports: header plus one example row."""
    return encode_csv(CATEGORY_TEMPLATE_COLUMNS, [CATEGORY_TEMPLATE_EXAMPLE])


def menu_item_template() -> str:
    """CSV template for menu item imports: header plus one example row."""
    return encode_csv(MENU_ITEM_TEMPLATE_COLUMNS, [MENU_ITEM_TEMPLATE_EXAMPLE])
