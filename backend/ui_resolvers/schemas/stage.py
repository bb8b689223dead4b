from typing import Any

from pydantic import BaseModel


class PaletteEntryOut(BaseModel):
    value: str
    label: str


class StageColorIn(BaseModel):
    # Operator-edited tracker config; malformed entries are tolerated, not rejected
    stage_mapping: Any = None
    stage_name: Any = None


class StageColorOut(BaseModel):
    stage_name: str | None = None
    color: str | None = None


class StageNamesOut(BaseModel):
    stages: list[str]
