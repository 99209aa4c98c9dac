"""Shared constants for asset sweeping.

Extension sets, cache limits and scheduling intervals used across the
catalog builder, reference scanner and quarantine manager.
"""

import re

# File extensions tracked as assets (each needs a .meta sidecar)
SUPPORTED_ASSET_EXTENSIONS = frozenset({
    ".png", ".jpg", ".jpeg", ".webp",
    ".prefab", ".scene", ".json",
    ".mp3", ".wav", ".ogg",
    ".fnt", ".atlas",
})

# File extensions whose text may embed other assets' UUIDs
SEARCHABLE_EXTENSIONS = frozenset({
    ".prefab", ".scene", ".fire",
    ".json", ".mtl", ".anim",
})

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".webp"})

# Files rewritten by the UUID replacer
REPLACE_TARGET_EXTENSIONS = frozenset({".prefab", ".scene", ".json", ".anim"})

META_SUFFIX = ".meta"

# Content cache limits
DEFAULT_CACHE_MAX_ENTRIES = 2000
DEFAULT_CACHE_MAX_BYTES = 200 * 1024 * 1024

# Assets checked concurrently per engine batch
DEFAULT_BATCH_SIZE = 10

# Files scanned between cooperative yields
DEFAULT_SCAN_YIELD_INTERVAL = 100

TEMP_FOLDER_SUFFIX = "_temp_unused"

# Skeleton dependency family: descriptor and atlas extensions
SKELETON_DESCRIPTOR_EXTENSION = ".json"
SKELETON_ATLAS_EXTENSION = ".atlas"
FONT_EXTENSION = ".fnt"

# Header lines of the atlas text format that never name a texture file
ATLAS_DIRECTIVES = ("size", "format", "filter", "repeat", "pma", "rotate")

FONT_PAGE_PATTERN = re.compile(r'page\s+id=\d+\s+file="([^"]+)"')

DB_URL_PREFIX = "db://"
DEFAULT_ASSETS_DIR = "assets"
