"""Furniture taxonomy used for both image search and listing synthesis."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CategorySpec:
    category: str
    queries: Tuple[str, ...]
    target: int  # images wanted for this category


# Order matters: resume skips everything up to the last completed category.
FURNITURE_CATEGORIES = (
    CategorySpec("sofa", ("sofa", "couch", "sectional", "loveseat"), 150),
    CategorySpec("dining-table", ("dining table", "kitchen table", "dining set"), 100),
    CategorySpec("bed", ("bed", "bed frame", "bedroom furniture"), 100),
    CategorySpec("wardrobe", ("wardrobe", "closet", "armoire"), 80),
    CategorySpec("desk", ("desk", "office desk", "study table"), 80),
    CategorySpec("outdoor", ("outdoor furniture", "patio set", "garden furniture"), 70),
    CategorySpec("storage", ("bookshelf", "cabinet", "storage unit"), 70),
    CategorySpec("chair", ("chair", "accent chair", "armchair"), 100),
    CategorySpec("coffee-table", ("coffee table", "side table", "end table"), 80),
    CategorySpec("entertainment", ("tv stand", "media console", "entertainment center"), 70),
)


def category_index(categories, name: str) -> int:
    """Position of a category by name, -1 if absent."""
    for i, spec in enumerate(categories):
        if spec.category == name:
            return i
    return -1
