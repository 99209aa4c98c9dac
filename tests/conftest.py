"""Shared fixtures for sweeper tests.

Builds small project trees on disk where every asset has a JSON ``.meta``
sidecar carrying its UUID.
"""

import json
import os
from pathlib import Path

import pytest

skip_if_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="file permissions are not enforced for root",
)


def write_asset(path: Path, uuid: str | None, content: str = "") -> Path:
    """Write an asset file and, if a UUID is given, its .meta sidecar."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if uuid is not None:
        meta = path.with_name(path.name + ".meta")
        meta.write_text(json.dumps({"ver": "1.0.0", "uuid": uuid}), encoding="utf-8")
    return path


def write_folder_meta(path: Path, uuid: str) -> Path:
    """Create a folder asset with its sidecar."""
    path.mkdir(parents=True, exist_ok=True)
    meta = path.with_name(path.name + ".meta")
    meta.write_text(json.dumps({"uuid": uuid, "isGroup": True}), encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project with an assets folder holding a UI folder and a scene.

    Layout::

        assets/
            ui/
                used.png        uuid-used     (referenced by main.scene)
                unused.png      uuid-unused
                icons/
                    orphan.png  uuid-orphan
            scenes/
                main.scene      uuid-scene    (references uuid-used)
    """
    assets = tmp_path / "assets"
    write_folder_meta(assets / "ui", "uuid-ui-folder")
    write_asset(assets / "ui" / "used.png", "uuid-used", "png-bytes")
    write_asset(assets / "ui" / "unused.png", "uuid-unused", "png-bytes")
    write_asset(assets / "ui" / "icons" / "orphan.png", "uuid-orphan", "png-bytes")
    write_asset(
        assets / "scenes" / "main.scene",
        "uuid-scene",
        json.dumps([{"__type__": "cc.Sprite", "_spriteFrame": {"__uuid__": "uuid-used"}}]),
    )
    return tmp_path


ATLAS_TEXT = """
hero.png
size: 512,512
format: RGBA8888
filter: Linear,Linear
repeat: none
head
  rotate: false
  xy: 2, 2
  size: 64, 64

hero2.png
size: 256,256
format: RGBA8888
filter: Linear,Linear
repeat: none
"""

FONT_TEXT = """info face="Arial" size=32
common lineHeight=32 base=26 scaleW=256 scaleH=256 pages=2
page id=0 file="title_0.png"
page id=1 file="title_1.png"
chars count=1
char id=32 x=0 y=0 width=0 height=0
"""


def build_spine_project(root: Path, referenced: bool = True) -> Path:
    """Create a project with a skeleton, a bitmap font and a level scene.

    With ``referenced`` the level scene references both the skeleton
    descriptor and the font.
    """
    fx = root / "assets" / "fx"
    write_asset(fx / "hero.json", "uuid-hero-json", "{}")
    write_asset(fx / "hero.atlas", "uuid-hero-atlas", ATLAS_TEXT)
    write_asset(fx / "hero.png", "uuid-hero-tex")
    write_asset(fx / "hero2.png", "uuid-hero-tex2")
    write_asset(fx / "title.fnt", "uuid-font", FONT_TEXT)
    write_asset(fx / "title_0.png", "uuid-font-0")
    write_asset(fx / "title_1.png", "uuid-font-1")

    scene_refs = ["uuid-hero-json", "uuid-font"] if referenced else []
    write_asset(
        root / "assets" / "scenes" / "level.scene",
        "uuid-level",
        json.dumps([{"__uuid__": ref} for ref in scene_refs]),
    )
    return root
