"""Type definitions for asset usage analysis.

Records produced by the catalog builder and the usage engine are frozen
dataclasses; the JSON reports written by the CLI are TypedDicts that
mirror the schemas in ``game_asset_sweeper/schemas/``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, TypedDict

ItemStatus = Literal["moved", "restored", "deleted", "modified", "unchanged", "missing", "failed"]
DependencyFamily = Literal["skeleton", "font"]


@dataclass(frozen=True)
class AssetRecord:
    """One tracked asset found during a catalog build.

    Attributes:
        path: Absolute path to the primary asset file
        uuid: Identifier read from the asset's .meta sidecar
        name: File name including extension
        relative_path: Path relative to the scan root
    """

    path: Path
    uuid: str
    name: str
    relative_path: str


@dataclass(frozen=True)
class UsageVerdict(AssetRecord):
    """An asset record together with its usage determination."""

    references: tuple[Path, ...] = ()
    used_as_dependency: bool = False

    @property
    def is_used(self) -> bool:
        """True if referenced directly or kept alive by a dependency family."""
        return len(self.references) > 0 or self.used_as_dependency

    @classmethod
    def from_record(
        cls,
        record: AssetRecord,
        references: list[Path] | tuple[Path, ...] = (),
        used_as_dependency: bool = False,
    ) -> "UsageVerdict":
        return cls(
            path=record.path,
            uuid=record.uuid,
            name=record.name,
            relative_path=record.relative_path,
            references=tuple(references),
            used_as_dependency=used_as_dependency,
        )

    def to_dict(self) -> "VerdictEntry":
        return VerdictEntry(
            path=str(self.path),
            uuid=self.uuid,
            name=self.name,
            relative_path=self.relative_path,
            is_used=self.is_used,
            used_as_dependency=self.used_as_dependency,
            references=[str(ref) for ref in self.references],
        )


@dataclass
class DependencyGroup:
    """Related assets whose usage is decided through a descriptor.

    Attributes:
        key: Shared base path of the family (directory + stem)
        family: "skeleton" or "font"
        descriptor: Top-level asset gating the group (skeleton .json or .fnt)
        auxiliary: Secondary descriptor parsed for textures (skeleton .atlas)
        resolved_textures: UUIDs of texture files named by the text
    """

    key: str
    family: DependencyFamily
    descriptor: AssetRecord | None = None
    auxiliary: AssetRecord | None = None
    resolved_textures: list[str] = field(default_factory=list)


@dataclass
class ItemResult:
    """Outcome of one file operation inside a batch."""

    path: Path
    status: ItemStatus
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == "failed"


@dataclass
class QuarantineReport:
    """Summary of a move, restore or delete on the quarantine folder."""

    operation: Literal["move", "restore", "delete"]
    temp_folder: Path
    items: list[ItemResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def moved_count(self) -> int:
        return sum(1 for item in self.items if item.status == "moved")

    @property
    def restored_count(self) -> int:
        return sum(1 for item in self.items if item.status == "restored")

    @property
    def errors(self) -> int:
        return sum(1 for item in self.items if item.failed)


@dataclass
class ReplaceReport:
    """Summary of a bulk UUID replacement over a folder."""

    folder: Path
    items: list[ItemResult] = field(default_factory=list)
    replaced: int = 0  # Total occurrences replaced across all files
    warnings: list[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.items)

    @property
    def modified(self) -> int:
        return sum(1 for item in self.items if item.status == "modified")

    @property
    def errors(self) -> int:
        return sum(1 for item in self.items if item.failed)


class VerdictEntry(TypedDict):
    """One asset in a scan report."""

    path: str
    uuid: str
    name: str
    relative_path: str
    is_used: bool
    used_as_dependency: bool
    references: list[str]


class ScanStats(TypedDict):
    total: int
    used: int
    unused: int
    used_as_dependency: int


class ScanReport(TypedDict):
    """Complete scan report as written by ``asset-sweeper scan``."""

    root: str
    search_root: str | None
    strategy: str
    duration_ms: int
    stats: ScanStats
    assets: list[VerdictEntry]


@dataclass
class ScanResult:
    """The verdicts of one scan plus where and how it ran."""

    root: Path
    verdicts: list[UsageVerdict]
    search_root: Path | None = None
    strategy: str = ""
    duration_ms: int = 0

    @property
    def used(self) -> list[UsageVerdict]:
        return [v for v in self.verdicts if v.is_used]

    @property
    def unused(self) -> list[UsageVerdict]:
        return [v for v in self.verdicts if not v.is_used]

    def stats(self) -> ScanStats:
        return ScanStats(
            total=len(self.verdicts),
            used=len(self.used),
            unused=len(self.unused),
            used_as_dependency=sum(1 for v in self.verdicts if v.used_as_dependency),
        )

    def to_report(self) -> ScanReport:
        return ScanReport(
            root=str(self.root),
            search_root=str(self.search_root) if self.search_root else None,
            strategy=self.strategy,
            duration_ms=self.duration_ms,
            stats=self.stats(),
            assets=[v.to_dict() for v in self.verdicts],
        )
