#!/usr/bin/env python3
"""
Fetch furniture photos from Unsplash/Pexels with resumable progress.

For each category (furniture_categories.py) and each of its search queries,
pages through the configured providers until the per-query quota, the
global target or MAX_PAGES is hit. Progress is checkpointed after every
page so an interrupted run resumes at the first unfinished category.

Output (in SEED_IMAGES_DIR):
- image_catalog.json      all unique images
- <source>_urls.json      same catalog restricted to one provider

Usage:
    python fetch_images.py          # Target 800 images
    python fetch_images.py 300      # Target 300 images
"""
import math
import sys
import time
from collections import Counter
from pathlib import Path

import httpx

from acquisition_progress import clear_progress, load_progress, save_progress
from furniture_categories import FURNITURE_CATEGORIES, category_index
from image_providers import configured_providers
from seed_common import ConfigError, IMAGES_DIR, PROGRESS_FILE, log, utc_now_iso, write_json

DEFAULT_TARGET = 800
PAGE_SIZE = 30
MAX_PAGES = 10            # Per query, bounds sparse queries
RATE_LIMIT_DELAY = 1.1    # Slightly over 1 second to be safe
HTTP_TIMEOUT = 30.0

COMBINED_CATALOG_NAME = "image_catalog.json"
LICENSE_NOTICE = "All images are free to use. Attribution appreciated where specified."


def dedup_images(images):
    """Unique images by (source, id). Last write wins, first position kept."""
    unique = {}
    for img in images:
        unique[img.key] = img
    return list(unique.values())


def build_catalog_meta(images) -> dict:
    per_source = Counter(img.source for img in images)
    per_category = Counter(img.category for img in images)
    return {
        "totalImages": len(images),
        "perSourceCounts": dict(per_source),
        "perCategoryCounts": dict(per_category),
        "generatedAt": utc_now_iso(),
        "licenseNotice": LICENSE_NOTICE,
    }


def source_catalog_name(source: str) -> str:
    return f"{source}_urls.json"


class ImageFetcher:
    """Category/query/page loop over an ordered provider chain."""

    def __init__(self, providers, categories=FURNITURE_CATEGORIES, progress_file: Path = PROGRESS_FILE,
                 images_dir: Path = IMAGES_DIR, sleep=time.sleep, transport=None):
        if not providers:
            raise ConfigError("No image providers configured")
        self.providers = list(providers)
        self.categories = tuple(categories)
        self.progress_file = Path(progress_file)
        self.images_dir = Path(images_dir)
        self.sleep = sleep
        self.transport = transport

    def fetch_page(self, client: httpx.Client, query: str, page: int):
        """First non-empty page in provider order. Returns (provider name, images)."""
        for provider in self.providers:
            images = provider.fetch_page(client, query, page, PAGE_SIZE, sleep=self.sleep)
            if images:
                return provider.name, images
        return None, []

    def run(self, target_total: int = DEFAULT_TARGET) -> dict:
        log(f"Target: {target_total} furniture images")
        log(f"Providers: {', '.join(p.name for p in self.providers)}")

        progress = load_progress(self.progress_file)
        last_index = category_index(self.categories, progress.last_completed_category)
        fetched_this_run = 0

        with httpx.Client(timeout=HTTP_TIMEOUT, follow_redirects=True, transport=self.transport) as client:
            for index, spec in enumerate(self.categories):
                if progress.completed_count >= target_total:
                    break
                # Already fully processed in a previous run
                if index <= last_index:
                    continue

                log(f"Fetching {spec.category} (target: {spec.target} images)...")
                category_count = 0
                per_query = math.ceil(spec.target / len(spec.queries))

                for query in spec.queries:
                    if category_count >= spec.target:
                        break

                    log(f"  Query: \"{query}\"")
                    page = 1
                    fetched_for_query = 0

                    while (fetched_for_query < per_query
                           and progress.completed_count < target_total
                           and page <= MAX_PAGES):
                        source, images = self.fetch_page(client, query, page)

                        if images:
                            images = images[:target_total - progress.completed_count]
                            for img in images:
                                img.category = spec.category

                            progress = progress.with_page(images)
                            save_progress(self.progress_file, progress)

                            category_count += len(images)
                            fetched_for_query += len(images)
                            fetched_this_run += len(images)
                            log(f"    {source}: +{len(images)} (total: {progress.completed_count})")

                            self.sleep(RATE_LIMIT_DELAY)

                        page += 1

                progress = progress.with_category_done(spec.category)
                save_progress(self.progress_file, progress)
                log(f"  {spec.category}: {category_count} images fetched")

                if progress.completed_count >= target_total:
                    log(f"Target reached! Total: {progress.completed_count} images")
                    break

        summary = self.finalize(progress.accumulated_images)
        summary["fetched"] = fetched_this_run
        return summary

    def finalize(self, images) -> dict:
        """Dedup, write catalogs, drop the checkpoint."""
        log("Finalizing...")
        unique = dedup_images(images)
        log(f"   Deduped: {len(images)} -> {len(unique)}")

        meta = build_catalog_meta(unique)
        combined_file = self.images_dir / COMBINED_CATALOG_NAME
        write_json(combined_file, {"meta": meta, "images": [img.to_dict() for img in unique]})
        log(f"Saved {len(unique)} images to {combined_file}")

        for source in meta["perSourceCounts"]:
            source_images = [img.to_dict() for img in unique if img.source == source]
            write_json(self.images_dir / source_catalog_name(source), {"meta": meta, "images": source_images})
            log(f"   {source}: {len(source_images)} images")

        log("Category Breakdown:")
        for category, count in sorted(meta["perCategoryCounts"].items(), key=lambda kv: kv[1], reverse=True):
            log(f"   {category:<20} {count}")

        clear_progress(self.progress_file)
        log("Complete! Ready to run: python generate_listings.py")

        return {
            "total": meta["totalImages"],
            "per_source": meta["perSourceCounts"],
            "per_category": meta["perCategoryCounts"],
        }


def parse_target(argv) -> int:
    """Optional positional target; anything unparsable or < 1 means the default."""
    if not argv:
        return DEFAULT_TARGET
    try:
        target = int(argv[0])
    except ValueError:
        return DEFAULT_TARGET
    return target if target > 0 else DEFAULT_TARGET


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    target = parse_target(argv)

    log("Furniture Image Fetcher")
    log("=" * 26)

    try:
        fetcher = ImageFetcher(configured_providers())
        fetcher.run(target)
    except Exception as e:
        log(f"Fatal error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
