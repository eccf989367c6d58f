"""Selection of catalog entries by identity.

The selection is a plain set of script paths mutated through explicit calls.
Resolving it against a catalog always yields entries in catalog order, no
matter in which order they were selected.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path

from scriptbay.core.catalog import ScriptCategory, ScriptEntry, iter_entries


class ScriptNameError(ValueError):
    """A script name given by the user does not identify exactly one entry."""


class SelectionSet:
    """Mutable set of selected script paths."""

    def __init__(self, paths: Iterable[Path] = ()) -> None:
        self._paths: set[Path] = set(paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, entry: object) -> bool:
        if isinstance(entry, ScriptEntry):
            return entry.path in self._paths
        return entry in self._paths

    def select(self, entry: ScriptEntry) -> None:
        self._paths.add(entry.path)

    def deselect(self, entry: ScriptEntry) -> None:
        self._paths.discard(entry.path)

    def toggle(self, entry: ScriptEntry) -> bool:
        """Flip the selection state of entry and return the new state."""
        if entry.path in self._paths:
            self._paths.remove(entry.path)
            return False
        self._paths.add(entry.path)
        return True

    def clear(self) -> None:
        self._paths.clear()

    def selected_entries(self, categories: Sequence[ScriptCategory]) -> list[ScriptEntry]:
        """Entries of categories that are selected, in catalog order.

        Paths that no longer appear in the catalog are ignored.
        """
        return [entry for entry in iter_entries(categories) if entry.path in self._paths]


def find_entry(categories: Sequence[ScriptCategory], name: str) -> ScriptEntry:
    """Look up one entry by ``category/name`` or by bare display name.

    Raises:
        ScriptNameError: If no entry or more than one entry matches
    """
    entries = iter_entries(categories)
    if "/" in name:
        matches = [entry for entry in entries if entry.qualified_name == name]
    else:
        matches = [entry for entry in entries if entry.display_name == name]

    if not matches:
        raise ScriptNameError(f"No script named '{name}'")
    if len(matches) > 1:
        candidates = ", ".join(entry.qualified_name for entry in matches)
        raise ScriptNameError(f"Script name '{name}' is ambiguous: {candidates}")
    return matches[0]


def select_by_names(categories: Sequence[ScriptCategory], names: Iterable[str]) -> SelectionSet:
    """Build a selection from user-supplied script names."""
    selection = SelectionSet()
    for name in names:
        selection.select(find_entry(categories, name))
    return selection
