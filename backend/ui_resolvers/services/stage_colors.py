"""Stage colour palette and lookup for tracker timelines and lists.

Operators set `stage_mapping[].color` when editing a tracker's stages; the
palette is what the colour picker offers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PaletteEntry:
    value: str
    label: str


STAGE_COLOR_PALETTE: tuple[PaletteEntry, ...] = (
    PaletteEntry("#3b82f6", "Blue"),
    PaletteEntry("#22c55e", "Green"),
    PaletteEntry("#f59e0b", "Amber"),
    PaletteEntry("#8b5cf6", "Violet"),
    PaletteEntry("#ec4899", "Pink"),
    PaletteEntry("#0ea5e9", "Sky"),
    PaletteEntry("#f97316", "Orange"),
    PaletteEntry("#64748b", "Slate"),
    PaletteEntry("#14b8a6", "Teal"),
    PaletteEntry("#ef4444", "Red"),
)

HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")


def palette_values() -> list[str]:
    return [entry.value for entry in STAGE_COLOR_PALETTE]


def _field(entry: Any, key: str):
    if isinstance(entry, dict):
        return entry.get(key)
    return getattr(entry, key, None)


def _entry_stage_name(entry: Any) -> str:
    # `stage` wins over `name` when both are set
    raw = _field(entry, "stage")
    if raw is None:
        raw = _field(entry, "name")
    if raw is None:
        return ""
    return str(raw).strip()


def get_stage_color(stage_mapping: Any, stage_name: Any) -> str | None:
    if not stage_name or not isinstance(stage_mapping, (list, tuple)):
        return None

    # Exact match after trimming; case is significant
    name = str(stage_name).strip()
    item = next((s for s in stage_mapping if _entry_stage_name(s) == name), None)
    if item is None:
        return None

    color = _field(item, "color")
    if isinstance(color, str) and HEX_COLOR_RE.fullmatch(color):
        return color
    return None


def stage_names(stage_mapping: Any) -> list[str]:
    if not isinstance(stage_mapping, (list, tuple)):
        return []
    return [name for name in (_entry_stage_name(s) for s in stage_mapping) if name]
