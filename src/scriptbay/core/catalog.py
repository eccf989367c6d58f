"""Script discovery and undo pairing.

Scripts live one directory level below the scripts root; the containing
directory name is the category:

    scripts/
      privacy/
        disable-telemetry.ps1
        disable-telemetry.undo.ps1
      network/
        flush-dns.ps1

An entry has an undo counterpart when ``<name>.undo<ext>`` or
``<name>-undo<ext>`` exists next to it, checked in that order.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from scriptbay.core.audit_log import AuditLog

UNDO_SUFFIXES = (".undo", "-undo")


@dataclass(frozen=True)
class ScriptEntry:
    """A runnable script discovered by a catalog scan.

    Identity is the path: two entries with the same path are the same script.
    """

    category: str
    display_name: str
    path: Path
    has_undo: bool

    @property
    def qualified_name(self) -> str:
        """Name unique across categories, e.g. ``privacy/disable-telemetry``."""
        return f"{self.category}/{self.display_name}"


@dataclass(frozen=True)
class ScriptCategory:
    """Entries found in one category directory, in directory order."""

    name: str
    entries: tuple[ScriptEntry, ...]


@dataclass(frozen=True)
class UndoBatch:
    """Result of resolving selected entries to their undo counterparts.

    Attributes:
        items: Undo scripts to run, in selection order
        skipped: Selected entries without an undo counterpart
    """

    items: tuple[ScriptEntry, ...]
    skipped: tuple[ScriptEntry, ...]

    @property
    def nothing_to_undo(self) -> bool:
        return not self.items


def find_undo_path(script_path: Path) -> Path | None:
    """Return the undo counterpart of script_path if one exists on disk.

    ``<stem>.undo<ext>`` wins over ``<stem>-undo<ext>`` when both exist.
    """
    for suffix in UNDO_SUFFIXES:
        candidate = script_path.with_name(f"{script_path.stem}{suffix}{script_path.suffix}")
        if candidate.is_file():
            return candidate
    return None


def has_undo_script(script_path: Path) -> bool:
    return find_undo_path(script_path) is not None


def resolve_undo_batch(entries: Iterable[ScriptEntry]) -> UndoBatch:
    """Map each selected entry to its undo script, dropping entries without one.

    The lookup runs against the filesystem now, not against the has_undo flag
    captured at scan time.
    """
    items: list[ScriptEntry] = []
    skipped: list[ScriptEntry] = []
    for entry in entries:
        undo_path = find_undo_path(entry.path)
        if undo_path is None:
            skipped.append(entry)
            continue
        items.append(
            ScriptEntry(
                category=entry.category,
                display_name=undo_path.stem,
                path=undo_path,
                has_undo=False,
            )
        )
    return UndoBatch(items=tuple(items), skipped=tuple(skipped))


def iter_entries(categories: Sequence[ScriptCategory]) -> list[ScriptEntry]:
    """Flatten categories into a single list, preserving catalog order."""
    return [entry for category in categories for entry in category.entries]


class ScriptCatalog:
    """Scans a scripts root into categories of runnable entries.

    Nothing is cached: every scan() reflects the directory tree at call time.
    """

    def __init__(self, audit_log: AuditLog, script_extension: str) -> None:
        self._audit_log = audit_log
        self._extension = script_extension.lower()

    @property
    def script_extension(self) -> str:
        return self._extension

    def scan(self, root: Path) -> list[ScriptCategory]:
        """Build the catalog from the immediate subdirectories of root.

        A missing root is created and yields an empty catalog. An unreadable
        root or category directory is logged and treated as empty.
        """
        if not root.exists():
            self._audit_log.log(f"Scripts folder not found, creating: {root}")
            try:
                root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                self._audit_log.log(f"Failed to create scripts folder {root}: {e}")
            return []

        try:
            category_dirs = [child for child in root.iterdir() if child.is_dir()]
        except OSError as e:
            self._audit_log.log(f"Warning: cannot read scripts folder {root}: {e}")
            return []

        categories: list[ScriptCategory] = []
        for category_dir in category_dirs:
            entries = self._scan_category(category_dir)
            if entries:
                categories.append(ScriptCategory(name=category_dir.name, entries=tuple(entries)))
        return categories

    def _scan_category(self, category_dir: Path) -> list[ScriptEntry]:
        try:
            files = [
                child
                for child in category_dir.iterdir()
                if child.is_file() and child.suffix.lower() == self._extension
            ]
        except OSError as e:
            self._audit_log.log(f"Warning: cannot read category folder {category_dir}: {e}")
            return []

        return [
            ScriptEntry(
                category=category_dir.name,
                display_name=path.stem,
                path=path.resolve(),
                has_undo=has_undo_script(path),
            )
            for path in files
        ]
