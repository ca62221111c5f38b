"""
Static menu catalog with courses, prices, and dietary tags.

In production, this would be backed by the restaurant's POS or a CMS.
Replies use ``**bold**`` markers and line breaks; the chat front end
renders them.
"""

import logging
from enum import Enum
from typing import TypedDict

from src.config import settings

logger = logging.getLogger(__name__)


class MenuCategory(str, Enum):
    """Sections a guest can ask about: four courses plus dietary filters."""

    STARTER = "starter"
    MAIN = "main"
    DESSERT = "dessert"
    BEVERAGE = "beverage"
    VEGETARIAN = "vegetarian"
    NON_VEG = "non-veg"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten-free"


class Dish(TypedDict):
    """A single menu item."""

    name: str
    course: str
    price: float
    description: str
    tags: list[str]


COURSES: dict[str, str] = {
    MenuCategory.STARTER.value: "Starters",
    MenuCategory.MAIN.value: "Main Course",
    MenuCategory.DESSERT.value: "Desserts",
    MenuCategory.BEVERAGE.value: "Beverages",
}

DIETARY_TITLES: dict[str, str] = {
    MenuCategory.VEGETARIAN.value: "Vegetarian Dishes",
    MenuCategory.NON_VEG.value: "Non-Vegetarian Dishes",
    MenuCategory.VEGAN.value: "Vegan Dishes",
    MenuCategory.GLUTEN_FREE.value: "Gluten-Free Dishes",
}

MENU_ITEMS: list[Dish] = [
    {"name": "Paneer Tikka", "course": "starter", "price": 12.0,
     "description": "Chargrilled cottage cheese with peppers and mint chutney",
     "tags": ["vegetarian", "gluten-free"]},
    {"name": "Chicken Seekh Kebab", "course": "starter", "price": 14.0,
     "description": "Minced chicken skewers with coriander and green chilli",
     "tags": ["non-veg", "gluten-free"]},
    {"name": "French Onion Soup", "course": "starter", "price": 10.0,
     "description": "Slow-cooked onions, gruyere crouton",
     "tags": ["vegetarian"]},
    {"name": "Crispy Chickpea Chaat", "course": "starter", "price": 9.0,
     "description": "Tamarind, pomegranate, and puffed rice",
     "tags": ["vegetarian", "vegan"]},
    {"name": "Hyderabadi Chicken Biryani", "course": "main", "price": 22.0,
     "description": "Dum-cooked basmati with saffron and fried onions",
     "tags": ["non-veg", "gluten-free"]},
    {"name": "Paneer Butter Masala", "course": "main", "price": 19.0,
     "description": "Cottage cheese in a tomato and cashew gravy",
     "tags": ["vegetarian", "gluten-free"]},
    {"name": "Lamb Rogan Josh", "course": "main", "price": 26.0,
     "description": "Kashmiri-style braised lamb shoulder",
     "tags": ["non-veg", "gluten-free"]},
    {"name": "Goan Prawn Curry", "course": "main", "price": 25.0,
     "description": "Coconut, kokum, and tiger prawns",
     "tags": ["non-veg", "gluten-free"]},
    {"name": "Coq au Vin", "course": "main", "price": 27.0,
     "description": "Chicken braised in red wine with mushrooms and lardons",
     "tags": ["non-veg"]},
    {"name": "Vegetable Ratatouille", "course": "main", "price": 18.0,
     "description": "Provencal stew of courgette, aubergine, and peppers",
     "tags": ["vegetarian", "vegan", "gluten-free"]},
    {"name": "Creme Brulee", "course": "dessert", "price": 9.0,
     "description": "Vanilla custard with a caramelised crust",
     "tags": ["vegetarian", "gluten-free"]},
    {"name": "Gulab Jamun", "course": "dessert", "price": 8.0,
     "description": "Warm milk dumplings in rose syrup",
     "tags": ["vegetarian"]},
    {"name": "Mango Sorbet", "course": "dessert", "price": 7.0,
     "description": "Alphonso mango, no dairy",
     "tags": ["vegetarian", "vegan", "gluten-free"]},
    {"name": "Masala Chai", "course": "beverage", "price": 4.0,
     "description": "Spiced milk tea",
     "tags": ["vegetarian", "gluten-free"]},
    {"name": "Mango Lassi", "course": "beverage", "price": 6.0,
     "description": "Yoghurt and mango smoothie",
     "tags": ["vegetarian", "gluten-free"]},
    {"name": "House Red Wine", "course": "beverage", "price": 11.0,
     "description": "Glass of Cotes du Rhone",
     "tags": ["vegetarian", "vegan", "gluten-free"]},
    {"name": "Craft Beer", "course": "beverage", "price": 8.0,
     "description": "Rotating local pale ale",
     "tags": ["vegetarian", "vegan"]},
]


def _format_dish(dish: Dish) -> str:
    return f"- **{dish['name']}** (${dish['price']:.2f}): {dish['description']}"


def get_menu_summary() -> str:
    """Return a short overview: each course with its first few dishes."""
    lines = [f"Here's a taste of the {settings.restaurant.name} menu:", ""]
    for course, title in COURSES.items():
        names = [d["name"] for d in MENU_ITEMS if d["course"] == course]
        lines.append(f"**{title}:** {', '.join(names[:3])}")
    lines.append("")
    lines.append(
        "Ask me about starters, mains, desserts, drinks, or vegetarian, vegan, "
        "and gluten-free options for the full listing."
    )
    return "\n".join(lines)


def get_menu_by_category(category: str) -> str:
    """
    Return the formatted listing for one course or dietary filter.

    Raises:
        ValueError: If ``category`` is not a known menu section.
    """
    key = MenuCategory(category).value

    if key in COURSES:
        title = COURSES[key]
        dishes = [d for d in MENU_ITEMS if d["course"] == key]
    else:
        title = DIETARY_TITLES[key]
        dishes = [d for d in MENU_ITEMS if key in d["tags"]]

    logger.debug("Menu listing for '%s': %d dishes", key, len(dishes))
    lines = [f"**{title}**", ""]
    lines.extend(_format_dish(d) for d in dishes)
    lines.append("")
    lines.append("Would you like to book a table to try them?")
    return "\n".join(lines)
