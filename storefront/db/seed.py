"""Seed menu and default settings used until an admin changes them."""

from storefront.core.config import settings
from storefront.schemas.menu import MenuItem
from storefront.schemas.settings import AppSettings

DEFAULT_CATEGORIES: list[str] = ["Starter", "Main Course", "Breads", "Rice", "Dessert", "Beverage"]

INITIAL_MENU: list[MenuItem] = [
    MenuItem(
        id="1",
        name="Butter Chicken",
        description="Rich tomato gravy with tender chicken pieces",
        price=320,
        type="non-veg",
        category="Main Course",
        is_available=True,
        image="https://picsum.photos/400/300?random=1",
    ),
    MenuItem(
        id="2",
        name="Paneer Tikka Masala",
        description="Grilled paneer cubes in spicy gravy",
        price=280,
        type="veg",
        category="Main Course",
        is_available=True,
        image="https://picsum.photos/400/300?random=2",
    ),
    MenuItem(
        id="3",
        name="Chicken Biryani",
        description="Aromatic basmati rice cooked with spices and chicken",
        price=350,
        type="non-veg",
        category="Rice",
        is_available=True,
        image="https://picsum.photos/400/300?random=3",
    ),
    MenuItem(
        id="4",
        name="Garlic Naan",
        description="Oven-baked flatbread topped with garlic",
        price=60,
        type="veg",
        category="Breads",
        is_available=True,
        image="https://picsum.photos/400/300?random=4",
    ),
    MenuItem(
        id="5",
        name="Gulab Jamun",
        description="Deep fried milk solids soaked in sugar syrup",
        price=80,
        type="veg",
        category="Dessert",
        is_available=True,
        image="https://picsum.photos/400/300?random=5",
    ),
    MenuItem(
        id="6",
        name="Masala Dosa",
        description="Crispy rice crepe filled with spiced potato",
        price=120,
        type="veg",
        category="Main Course",
        is_available=False,
        image="https://picsum.photos/400/300?random=6",
    ),
]


def seed_menu() -> list[MenuItem]:
    """Return fresh copies of the seed menu."""
    return [item.model_copy() for item in INITIAL_MENU]


def default_settings() -> AppSettings:
    return AppSettings(whatsapp_number=settings.whatsapp_number, categories=list(DEFAULT_CATEGORIES))
