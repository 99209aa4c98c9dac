"""Transitive usage through dependency families.

Some assets are never referenced by UUID directly: a skeleton animation's
atlas and textures are loaded through the skeleton descriptor, and a
bitmap font's page textures through the ``.fnt`` file. This module finds
those families and reports the children as used whenever their top-level
descriptor is referenced.

Families:

- skeleton: ``<name>.json`` + ``<name>.atlas`` in the same folder; the atlas
  text lists its texture files. Groups are keyed by folder plus stem rather
  than by bare file name, so ``a/hero.json`` never pairs with
  ``b/hero.atlas``.
- font: ``<name>.fnt``; its ``page id=N file="..."`` lines list textures.
"""

import os
from collections.abc import Iterable
from pathlib import Path

from .constants import (
    ATLAS_DIRECTIVES,
    FONT_EXTENSION,
    FONT_PAGE_PATTERN,
    SKELETON_ATLAS_EXTENSION,
    SKELETON_DESCRIPTOR_EXTENSION,
)
from .core.metadata import get_asset_uuid_by_path
from .core.types import AssetRecord, DependencyGroup
from .scanner import ReferenceScanner


def group_key(path: Path) -> str:
    """Shared base of a family: the file path without its extension."""
    return str(path.with_suffix(""))


def group_skeletons(assets: Iterable[AssetRecord]) -> dict[str, DependencyGroup]:
    """Pair skeleton descriptors with atlases sharing their base name.

    Every ``.json`` and ``.atlas`` asset lands in a group, even when its
    partner is missing.
    """
    groups: dict[str, DependencyGroup] = {}

    for asset in assets:
        ext = asset.path.suffix.lower()
        if ext not in (SKELETON_DESCRIPTOR_EXTENSION, SKELETON_ATLAS_EXTENSION):
            continue

        key = group_key(asset.path)
        group = groups.setdefault(key, DependencyGroup(key=key, family="skeleton"))
        if ext == SKELETON_DESCRIPTOR_EXTENSION:
            group.descriptor = asset
        else:
            group.auxiliary = asset

    return groups


def parse_atlas_textures(text: str) -> list[str]:
    """Extract texture file names from atlas text.

    A line names a texture when it is non-empty, has no colon, and does not
    start with a header directive such as ``size`` or ``filter``.
    """
    textures = []
    for line in text.splitlines():
        line = line.strip()
        if not line or ":" in line or line.startswith(ATLAS_DIRECTIVES):
            continue
        textures.append(line)
    return textures


def parse_font_textures(text: str) -> list[str]:
    """Extract page texture file names from bitmap-font text."""
    return [match.group(1) for match in FONT_PAGE_PATTERN.finditer(text)]


def resolve_texture_uuids(owner: Path, names: Iterable[str]) -> list[str]:
    """Resolve texture names, relative to the owner's folder, to UUIDs.

    Names whose file has no usable sidecar are dropped.
    """
    uuids = []
    for name in names:
        texture_path = Path(os.path.normpath(owner.parent / name))
        uuid = get_asset_uuid_by_path(texture_path)
        if uuid:
            uuids.append(uuid)
    return uuids


class DependencyResolver:
    """Computes the set of UUIDs used only through dependency families.

    Example:
        >>> resolver = DependencyResolver(scanner)
        >>> used = await resolver.resolve(assets, search_root)
    """

    def __init__(self, scanner: ReferenceScanner):
        self.scanner = scanner

    def skeleton_groups(self, assets: Iterable[AssetRecord]) -> list[DependencyGroup]:
        """Skeleton groups with their atlas textures resolved."""
        groups = list(group_skeletons(assets).values())
        for group in groups:
            if group.auxiliary is None:
                continue
            text = self.scanner.read_text(group.auxiliary.path)
            if text is not None:
                group.resolved_textures = resolve_texture_uuids(
                    group.auxiliary.path, parse_atlas_textures(text)
                )
        return groups

    def font_groups(self, assets: Iterable[AssetRecord]) -> list[DependencyGroup]:
        """One group per bitmap font with its page textures resolved."""
        groups = []
        for asset in assets:
            if asset.path.suffix.lower() != FONT_EXTENSION:
                continue
            group = DependencyGroup(key=group_key(asset.path), family="font", descriptor=asset)
            text = self.scanner.read_text(asset.path)
            if text is not None:
                group.resolved_textures = resolve_texture_uuids(
                    asset.path, parse_font_textures(text)
                )
            groups.append(group)
        return groups

    async def resolve(
        self,
        assets: list[AssetRecord],
        search_root: Path | None = None,
    ) -> set[str]:
        """Find UUIDs kept alive by a referenced descriptor.

        Args:
            assets: Catalog to inspect
            search_root: Folder searched for descriptor references

        Returns:
            UUIDs of atlases and textures whose descriptor is referenced
        """
        used: set[str] = set()

        for group in self.skeleton_groups(assets):
            # Without an atlas there is nothing to propagate
            if group.descriptor is None or group.auxiliary is None:
                continue
            if await self.scanner.find_references(group.descriptor.uuid, search_root):
                used.add(group.auxiliary.uuid)
                used.update(group.resolved_textures)

        for group in self.font_groups(assets):
            if group.descriptor is None or not group.resolved_textures:
                continue
            if await self.scanner.find_references(group.descriptor.uuid, search_root):
                used.update(group.resolved_textures)

        return used
