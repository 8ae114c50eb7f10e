"""Shared helpers for the seed-data scripts.

Paths, .env configuration, timestamped logging and atomic JSON files.
fetch_images.py and generate_listings.py both import from here.
"""
import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).parent

# Paths
IMAGES_DIR = Path(os.getenv("SEED_IMAGES_DIR") or BASE_DIR / "images")
DATA_DIR = Path(os.getenv("SEED_DATA_DIR") or BASE_DIR / "data")
PROGRESS_FILE = IMAGES_DIR / "progress.json"
IMAGE_CATALOG_FILE = IMAGES_DIR / "image_catalog.json"
LISTING_CATALOG_FILE = DATA_DIR / "listings_large.json"


class ConfigError(RuntimeError):
    """No usable provider configuration."""


class CatalogError(ValueError):
    """Input catalog is missing or has the wrong shape."""


def ts():
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def log(msg: str):
    print(f"[{ts()}] {msg}", flush=True)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def read_json(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data):
    """Write JSON atomically: temp file in the same dir, then replace."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_fd, temp_path = tempfile.mkstemp(dir=path.parent, suffix=".json.tmp")
    os.close(temp_fd)
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(temp_path, str(path))
    except Exception:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise
