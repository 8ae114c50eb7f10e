"""Photo search providers (Unsplash, Pexels) behind one search interface.

Each provider maps its API payload to ImageRecord. fetch_page() wraps
search() with the shared retry policy:
- 429: fixed 60s pause, does not consume a retry attempt
- anything else: backoff of RETRY_BACKOFF * attempt, consumes an attempt
- exhausted: returns [] (logged, never raised)
"""
import os
import time
from dataclasses import dataclass, field
from typing import List

import httpx

from seed_common import ConfigError, log

UNSPLASH_API = "https://api.unsplash.com"
PEXELS_API = "https://api.pexels.com/v1"

# Retry policy
MAX_RETRIES = 3
RETRY_BACKOFF = 2.0      # seconds, multiplied by attempt number
RATE_LIMIT_PAUSE = 60.0  # seconds to wait on HTTP 429
MAX_RATE_LIMIT_PAUSES = 5


@dataclass
class ImageRecord:
    id: str
    url: str
    thumbnail_url: str
    category: str
    source: str
    width: int = 0
    height: int = 0
    color: str = ""
    tags: List[str] = field(default_factory=list)
    photographer: str = ""
    photographer_url: str = ""
    license: str = ""

    @property
    def key(self) -> tuple:
        """Dedup key. Ids are only unique within a source."""
        return (self.source, self.id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "thumbnailUrl": self.thumbnail_url,
            "category": self.category,
            "tags": list(self.tags),
            "width": self.width,
            "height": self.height,
            "color": self.color,
            "source": self.source,
            "photographer": self.photographer,
            "photographerUrl": self.photographer_url,
            "license": self.license,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ImageRecord":
        return cls(
            id=str(data["id"]),
            url=data["url"],
            thumbnail_url=data.get("thumbnailUrl") or "",
            category=data["category"],
            source=data.get("source") or "",
            width=data.get("width") or 0,
            height=data.get("height") or 0,
            color=data.get("color") or "",
            tags=list(data.get("tags") or []),
            photographer=data.get("photographer") or "",
            photographer_url=data.get("photographerUrl") or "",
            license=data.get("license") or "",
        )


class ImageProvider:
    """Base class for a photo search API."""

    name = "provider"
    env_var = None

    def __init__(self, api_key: str):
        self.api_key = api_key

    def search(self, client: httpx.Client, query: str, page: int, per_page: int) -> List[ImageRecord]:
        raise NotImplementedError

    def fetch_page(self, client: httpx.Client, query: str, page: int, per_page: int = 30,
                   sleep=time.sleep) -> List[ImageRecord]:
        """search() with retries. Never raises for provider errors."""
        attempt = 0
        rate_limit_pauses = 0

        while attempt < MAX_RETRIES:
            try:
                return self.search(client, query, page, per_page)
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 429:
                    if rate_limit_pauses >= MAX_RATE_LIMIT_PAUSES:
                        log(f"  {self.name}: still rate limited after {rate_limit_pauses} pauses, "
                            f"skipping '{query}' page {page}")
                        return []
                    rate_limit_pauses += 1
                    log(f"  {self.name}: rate limited. Waiting {RATE_LIMIT_PAUSE:.0f}s...")
                    sleep(RATE_LIMIT_PAUSE)
                    continue
                error = f"HTTP {e.response.status_code}"
            except httpx.HTTPError as e:
                error = f"{type(e).__name__}: {e}"
            except (KeyError, TypeError, ValueError) as e:
                error = f"bad payload ({type(e).__name__}: {e})"

            attempt += 1
            if attempt >= MAX_RETRIES:
                log(f"  {self.name}: failed '{query}' page {page} after {MAX_RETRIES} retries: {error}")
                return []
            sleep(RETRY_BACKOFF * attempt)

        return []


class UnsplashProvider(ImageProvider):
    name = "unsplash"
    env_var = "UNSPLASH_ACCESS_KEY"
    license = "Unsplash License (free to use, attribution appreciated)"

    def search(self, client, query, page, per_page):
        response = client.get(
            f"{UNSPLASH_API}/search/photos",
            params={
                "query": query,
                "page": page,
                "per_page": per_page,
                "orientation": "landscape",
                "content_filter": "high",
            },
            headers={
                "Authorization": f"Client-ID {self.api_key}",
                "Accept-Version": "v1",
            },
        )
        response.raise_for_status()

        records = []
        for img in response.json()["results"]:
            user = img.get("user") or {}
            records.append(ImageRecord(
                id=str(img["id"]),
                url=img["urls"]["regular"],
                thumbnail_url=img["urls"]["thumb"],
                category=query,
                source=self.name,
                width=img.get("width") or 0,
                height=img.get("height") or 0,
                color=img.get("color") or "",
                tags=[t["title"] for t in img.get("tags") or [] if t.get("title")],
                photographer=user.get("name") or "",
                photographer_url=(user.get("links") or {}).get("html") or "",
                license=self.license,
            ))
        return records


class PexelsProvider(ImageProvider):
    name = "pexels"
    env_var = "PEXELS_API_KEY"
    license = "Pexels License (free to use, attribution appreciated)"

    def search(self, client, query, page, per_page):
        response = client.get(
            f"{PEXELS_API}/search",
            params={
                "query": query,
                "page": page,
                "per_page": per_page,
                "orientation": "landscape",
            },
            headers={"Authorization": self.api_key},
        )
        response.raise_for_status()

        return [
            ImageRecord(
                id=str(img["id"]),
                url=img["src"]["large"],
                thumbnail_url=img["src"]["small"],
                category=query,
                source=self.name,
                width=img.get("width") or 0,
                height=img.get("height") or 0,
                color=img.get("avg_color") or "",
                tags=[query, "furniture"],
                photographer=img.get("photographer") or "",
                photographer_url=img.get("photographer_url") or "",
                license=self.license,
            )
            for img in response.json()["photos"]
        ]


# Fallback order: first provider with results wins each page.
PROVIDER_CLASSES = (UnsplashProvider, PexelsProvider)


def configured_providers(env=None) -> List[ImageProvider]:
    """Providers whose credential is set, in fallback order.

    Raises ConfigError if none are configured.
    """
    env = os.environ if env is None else env
    providers = [cls(env[cls.env_var]) for cls in PROVIDER_CLASSES if env.get(cls.env_var)]
    if not providers:
        names = " or ".join(cls.env_var for cls in PROVIDER_CLASSES)
        raise ConfigError(f"At least one API key required: {names}")
    return providers
