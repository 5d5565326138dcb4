"""Selection and ordering of the files an IDE opens for an example."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict, List, Sequence, Tuple

from .models import FileOpenEntry

UI_SUFFIX = ".qml"
SOURCE_SUFFIX = ".cpp"
HEADER_SUFFIX = ".h"

# Lower value opens first; the lowest present value is the main file.
_BASE_NAME_PRIORITIES: Tuple[Tuple[str, int], ...] = (
    (UI_SUFFIX, 0),
    (SOURCE_SUFFIX, 1),
    (HEADER_SUFFIX, 2),
)
_MAIN_FILE_PRIORITIES: Tuple[Tuple[str, int], ...] = (
    ("main" + UI_SUFFIX, 3),
    ("main" + SOURCE_SUFFIX, 4),
)


def base_name(path: str) -> str:
    """File name up to its first dot (``foo.ui.qml`` -> ``foo``)."""
    name = PurePosixPath(path.replace("\\", "/")).name
    return name.split(".", 1)[0]


def file_priority(path: str, example_base_name: str) -> int | None:
    """Priority of ``path`` for ``example_base_name`` or ``None`` when not opened."""
    file_name = PurePosixPath(path.replace("\\", "/")).name.lower()
    if base_name(path).lower() == example_base_name.lower():
        for suffix, priority in _BASE_NAME_PRIORITIES:
            if file_name.endswith(suffix):
                return priority
        return None
    for suffix, priority in _MAIN_FILE_PRIORITIES:
        if file_name.endswith(suffix):
            return priority
    return None


def prioritize(files: Sequence[str], example_base_name: str) -> Tuple[FileOpenEntry, ...]:
    """Rank ``files`` and flag the main one.

    The first file seen for a priority keeps the slot. ``main.qml``/``main.cpp``
    are fallbacks: they are dropped once any file named after the example is
    selected.
    """
    slots: Dict[int, str] = {}
    for path in files:
        priority = file_priority(path, example_base_name)
        if priority is None or priority in slots:
            continue
        slots[priority] = path

    fallback_floor = min(priority for _, priority in _MAIN_FILE_PRIORITIES)
    if any(priority < fallback_floor for priority in slots):
        slots = {priority: path for priority, path in slots.items() if priority < fallback_floor}

    entries: List[FileOpenEntry] = []
    for index, priority in enumerate(sorted(slots)):
        entries.append(FileOpenEntry(path=slots[priority], priority=priority, is_main=index == 0))
    return tuple(entries)


__all__ = [
    "HEADER_SUFFIX",
    "SOURCE_SUFFIX",
    "UI_SUFFIX",
    "base_name",
    "file_priority",
    "prioritize",
]
