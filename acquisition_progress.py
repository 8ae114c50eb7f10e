"""Resumable checkpoint for the image acquisition job.

AcquisitionProgress is an immutable value: every page or finished category
produces a new one, which fetch_images.py saves straight away. The file on
disk is the only state that survives a crash.

File format:
    {"completedCount": int, "lastCompletedCategory": str,
     "accumulatedImages": [ImageRecord dict, ...]}
"""
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Tuple

from image_providers import ImageRecord
from seed_common import log, read_json, write_json

# Keys written by the first version of the fetcher
LEGACY_KEYS = {
    "completed": "completedCount",
    "lastCategory": "lastCompletedCategory",
    "images": "accumulatedImages",
}


@dataclass(frozen=True)
class AcquisitionProgress:
    completed_count: int = 0
    last_completed_category: str = ""
    accumulated_images: Tuple[ImageRecord, ...] = ()

    def with_page(self, images: Iterable[ImageRecord]) -> "AcquisitionProgress":
        images = tuple(images)
        return replace(
            self,
            completed_count=self.completed_count + len(images),
            accumulated_images=self.accumulated_images + images,
        )

    def with_category_done(self, category: str) -> "AcquisitionProgress":
        return replace(self, last_completed_category=category)

    def to_dict(self) -> dict:
        return {
            "completedCount": self.completed_count,
            "lastCompletedCategory": self.last_completed_category,
            "accumulatedImages": [img.to_dict() for img in self.accumulated_images],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AcquisitionProgress":
        # Migrate legacy key names
        data = {LEGACY_KEYS.get(k, k): v for k, v in data.items()}
        return cls(
            completed_count=int(data.get("completedCount") or 0),
            last_completed_category=data.get("lastCompletedCategory") or "",
            accumulated_images=tuple(ImageRecord.from_dict(d) for d in data.get("accumulatedImages") or []),
        )


def load_progress(path: Path) -> AcquisitionProgress:
    """Load checkpoint, or a fresh zero state if there is none."""
    path = Path(path)
    if not path.exists():
        log("Starting fresh fetch...")
        return AcquisitionProgress()

    progress = AcquisitionProgress.from_dict(read_json(path))
    log(f"Resuming from {progress.completed_count} images "
        f"(last completed category: {progress.last_completed_category or 'none'})")
    return progress


def save_progress(path: Path, progress: AcquisitionProgress):
    """Full overwrite of the checkpoint."""
    write_json(path, progress.to_dict())


def clear_progress(path: Path):
    """Delete the checkpoint. Missing file is fine."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        pass
