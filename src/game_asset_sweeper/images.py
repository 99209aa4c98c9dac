"""Image inventory of a folder."""

from dataclasses import dataclass, field
from pathlib import Path

from .constants import IMAGE_EXTENSIONS
from .walker import extension_filter, walk_files


@dataclass
class ImageFile:
    path: Path
    name: str
    ext: str
    size: int


@dataclass
class ImageStats:
    """Counts of images by kind plus one entry per image."""

    total: int = 0
    png: int = 0
    jpg: int = 0
    webp: int = 0
    details: list[ImageFile] = field(default_factory=list)

    @property
    def total_size(self) -> int:
        return sum(image.size for image in self.details)


def collect_image_stats(root: Path) -> ImageStats:
    """Count and list the images under a folder.

    ``.jpg`` and ``.jpeg`` are both counted as jpg. Files that vanish or
    cannot be stat'ed during the walk are skipped.
    """
    stats = ImageStats()

    for path in walk_files(root, extension_filter(IMAGE_EXTENSIONS)):
        try:
            size = path.stat().st_size
        except OSError:
            continue

        ext = path.suffix.lower()
        stats.details.append(ImageFile(path=path, name=path.name, ext=ext, size=size))
        stats.total += 1
        if ext == ".png":
            stats.png += 1
        elif ext in (".jpg", ".jpeg"):
            stats.jpg += 1
        elif ext == ".webp":
            stats.webp += 1

    return stats
