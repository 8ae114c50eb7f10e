#!/usr/bin/env python3
"""
Turn the image catalog into realistic Nigerian furniture listings.

Images are grouped by category and consumed left to right in windows of
1-5; each window becomes exactly one listing, so no image is shared and no
listing mixes categories. Price follows condition, dimensions and
materials follow category.

All randomness comes from one RandomSource. Set LISTING_SEED in the
environment (or .env) for a reproducible catalog.

Usage:
    python generate_listings.py
"""
import math
import os
import re
import string
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional

from faker import Faker
from tqdm import tqdm

import listing_vocab as vocab
from image_providers import ImageRecord
from seed_common import (
    CatalogError, ConfigError, IMAGE_CATALOG_FILE, LISTING_CATALOG_FILE, log, read_json, utc_now_iso,
    write_json,
)

MAX_IMAGES_PER_LISTING = 5
FEATURED_PROBABILITY = 0.10
STOCK_RANGE = (1, 8)
SLUG_SUFFIX_LENGTH = 6
SLUG_ALPHABET = string.ascii_lowercase + string.digits
BACKDATE_DAYS = 365

PLACEHOLDER = re.compile(r"\{(\w+)\}")


class RandomSource:
    """Single seedable source for every random draw.

    Wraps a Faker instance; `random` is its random.Random, so Faker's
    uuids/dates and our own choices share one stream.
    """

    def __init__(self, seed: Optional[int] = None):
        self.faker = Faker()
        self.faker.seed_instance(seed)
        self.random = self.faker.random

    def choice(self, items):
        return self.random.choice(items)

    def sample(self, items, k: int):
        return self.random.sample(list(items), k)

    def randint(self, low: int, high: int) -> int:
        return self.random.randint(low, high)

    def chance(self, probability: float) -> bool:
        return self.random.random() < probability

    def weighted(self, pairs):
        """Pick a value from [(value, weight), ...]."""
        values = [v for v, _ in pairs]
        weights = [w for _, w in pairs]
        return self.random.choices(values, weights=weights, k=1)[0]

    def alphanumeric(self, length: int) -> str:
        return "".join(self.random.choices(SLUG_ALPHABET, k=length))

    def uuid(self) -> str:
        return self.faker.uuid4()

    def past_datetime(self, now: datetime, days: int = BACKDATE_DAYS) -> datetime:
        return self.faker.date_time_between(
            start_date=now - timedelta(days=days), end_date=now, tzinfo=timezone.utc
        )


@dataclass
class Listing:
    id: str
    title: str
    slug: str
    description: str
    price: int
    city: str
    condition: str
    materials: List[str]
    dimensions: Dict[str, object]
    images: List[str]
    category: str
    tags: List[str]
    stock: int
    featured: bool
    created_at: str
    currency: str = vocab.CURRENCY

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "price_ngn": self.price,
            "currency": self.currency,
            "city": self.city,
            "condition": self.condition,
            "materials": list(self.materials),
            "dimensions": dict(self.dimensions),
            "images": list(self.images),
            "category": self.category,
            "tags": list(self.tags),
            "stock": self.stock,
            "featured": self.featured,
            "createdAt": self.created_at,
        }


def slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def round_price(value: float) -> int:
    """Nearest PRICE_ROUNDING, halves up, never below one unit."""
    rounded = math.floor(value / vocab.PRICE_ROUNDING + 0.5) * vocab.PRICE_ROUNDING
    return max(vocab.PRICE_ROUNDING, int(rounded))


def price_bounds(category: str):
    """Lowest and highest price a listing in this category can get."""
    low, high = vocab.PRICE_RANGES.get(category, vocab.DEFAULT_PRICE_RANGE)
    return (
        round_price(low * min(vocab.CONDITION_MULTIPLIERS.values())),
        round_price(high * max(vocab.CONDITION_MULTIPLIERS.values())),
    )


def load_image_catalog(path: Path) -> List[ImageRecord]:
    """Read the combined image catalog. Raises CatalogError if unusable."""
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Image catalog not found: {path} (run fetch_images.py first)")
    try:
        data = read_json(path)
    except ValueError as e:
        raise CatalogError(f"Image catalog is not valid JSON: {e}") from e
    except OSError as e:
        raise CatalogError(f"Image catalog could not be read: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("images"), list):
        raise CatalogError(f"Image catalog has no 'images' list: {path}")
    if not data["images"]:
        raise CatalogError(f"Image catalog is empty: {path}")

    try:
        return [ImageRecord.from_dict(d) for d in data["images"]]
    except (KeyError, TypeError, AttributeError) as e:
        raise CatalogError(f"Malformed image record: {e!r}") from e


def group_by_category(images) -> Dict[str, List[ImageRecord]]:
    groups = {}
    for img in images:
        groups.setdefault(img.category, []).append(img)
    return groups


class ListingGenerator:
    def __init__(self, images_file: Optional[Path] = None, output_file: Optional[Path] = None,
                 rng: Optional[RandomSource] = None, now: Optional[datetime] = None):
        self.images_file = Path(images_file or IMAGE_CATALOG_FILE)
        self.output_file = Path(output_file or LISTING_CATALOG_FILE)
        self.rng = rng or RandomSource()
        self.now = now or datetime.now(timezone.utc)

    # ------------------------------------------------------------------
    # Field generators
    # ------------------------------------------------------------------

    def generate_title(self, category: str, material: str) -> str:
        template = self.rng.choice(vocab.TITLE_TEMPLATES.get(category, vocab.DEFAULT_TITLE_TEMPLATES))
        fillers = dict(vocab.TITLE_FILLERS, **vocab.CATEGORY_FILLERS.get(category, {}))

        def fill(match):
            token = match.group(1)
            if token == "material":
                return material
            if token in fillers:
                return self.rng.choice(fillers[token])
            return match.group(0)

        return PLACEHOLDER.sub(fill, template)

    def generate_slug(self, title: str) -> str:
        base = slugify(title) or "listing"
        return f"{base}-{self.rng.alphanumeric(SLUG_SUFFIX_LENGTH)}"

    def generate_description(self, title: str, material: str, condition: str, city: str) -> str:
        lowered = title.lower()
        features = self.rng.sample(vocab.DESCRIPTION_FEATURES, self.rng.randint(2, 3))
        return " ".join([
            self.rng.choice(vocab.DESCRIPTION_INTROS).format(title=lowered),
            " ".join(f.format(material=material, condition=condition) for f in features),
            self.rng.choice(vocab.DESCRIPTION_DELIVERY).format(city=city),
            vocab.DESCRIPTION_CLOSING,
        ])

    def generate_dimensions(self, category: str, title: str = "") -> dict:
        ranges = vocab.DIMENSION_RANGES.get(category, vocab.DEFAULT_DIMENSION_RANGES)
        dims = {axis: self.rng.randint(low, high) for axis, (low, high) in ranges.items()}

        if category in vocab.ROUND_CATEGORIES and "round" in title.lower():
            dims["diameter"] = dims.pop("length")
            dims.pop("width", None)

        dims["unit"] = vocab.DIMENSION_UNIT
        return dims

    def generate_price(self, category: str, condition: str) -> int:
        low, high = vocab.PRICE_RANGES.get(category, vocab.DEFAULT_PRICE_RANGE)
        base = self.rng.randint(low, high)
        return round_price(base * vocab.CONDITION_MULTIPLIERS[condition])

    def generate_listing(self, images: List[ImageRecord]) -> Listing:
        """One listing from a non-empty window of same-category images."""
        category = images[0].category
        condition = self.rng.weighted(vocab.CONDITION_WEIGHTS)

        pool = vocab.MATERIALS_BY_CATEGORY.get(category, vocab.DEFAULT_MATERIALS)
        materials = self.rng.sample(pool, min(len(pool), self.rng.randint(1, 2)))
        primary_material = materials[0]

        title = self.generate_title(category, primary_material)
        slug = self.generate_slug(title)
        city = self.rng.choice(vocab.NIGERIAN_CITIES)
        price = self.generate_price(category, condition)
        description = self.generate_description(title, primary_material, condition, city)
        featured = self.rng.chance(FEATURED_PROBABILITY)

        tags = []
        for img in images:
            tags.extend(img.tags)
        tags.extend([category, *materials, condition])

        return Listing(
            id=self.rng.uuid(),
            title=title,
            slug=slug,
            description=description,
            price=price,
            city=city,
            condition=condition,
            materials=materials,
            dimensions=self.generate_dimensions(category, title),
            images=[img.url for img in images],
            category=category,
            tags=list(dict.fromkeys(tags)),
            stock=self.rng.randint(*STOCK_RANGE),
            featured=featured,
            created_at=self.rng.past_datetime(self.now).isoformat(),
        )

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def generate_for_category(self, images: List[ImageRecord]) -> List[Listing]:
        """Consume the group left to right, 1-5 images per listing."""
        listings = []
        i = 0
        while i < len(images):
            size = self.rng.randint(1, min(MAX_IMAGES_PER_LISTING, len(images) - i))
            listings.append(self.generate_listing(images[i:i + size]))
            i += size
        return listings

    def generate_all(self, images: List[ImageRecord]) -> Dict[str, List[Listing]]:
        groups = group_by_category(images)
        return {
            category: self.generate_for_category(group)
            for category, group in tqdm(groups.items(), desc="Categories", unit="cat")
        }

    def run(self) -> dict:
        images = load_image_catalog(self.images_file)
        log(f"Loaded {len(images)} images")
        log("Generating listings...")

        by_category = self.generate_all(images)
        listings = [listing for group in by_category.values() for listing in group]
        prices = [listing.price for listing in listings]

        output = {
            "meta": {
                "totalListings": len(listings),
                "totalImages": len(images),
                "categories": list(by_category),
                "generatedAt": utc_now_iso(),
                "priceRange": {
                    "min": min(prices),
                    "max": max(prices),
                    "currency": vocab.CURRENCY,
                },
            },
            "listings": [listing.to_dict() for listing in listings],
        }
        write_json(self.output_file, output)

        log(f"Generated {len(listings)} listings")
        log(f"Saved to {self.output_file}")

        log("Listings by Category:")
        for category, group in sorted(by_category.items(), key=lambda kv: len(kv[1]), reverse=True):
            log(f"   {category:<20} {len(group)} listings")

        log("Price Statistics:")
        log(f"   Lowest:  ₦{min(prices):,}")
        log(f"   Highest: ₦{max(prices):,}")
        log(f"   Average: ₦{round(sum(prices) / len(prices)):,}")
        log("Ready to seed database")

        return {
            "listings": len(listings),
            "images": len(images),
            "categories": list(by_category),
            "min_price": min(prices),
            "max_price": max(prices),
        }


def seed_from_env(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"LISTING_SEED must be an integer, got {value!r}")


def main() -> int:
    log("Furniture Listing Generator")
    log("=" * 30)

    try:
        rng = RandomSource(seed_from_env(os.getenv("LISTING_SEED")))
        ListingGenerator(rng=rng).run()
    except (CatalogError, ConfigError, OSError) as e:
        log(f"Fatal error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
