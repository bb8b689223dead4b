from fastapi import APIRouter

from ui_resolvers.schemas.stage import PaletteEntryOut, StageColorIn, StageColorOut, StageNamesOut
from ui_resolvers.services.stage_colors import STAGE_COLOR_PALETTE, get_stage_color, stage_names

router = APIRouter()


@router.get("/palette", response_model=list[PaletteEntryOut])
def list_palette():
    return [PaletteEntryOut(value=e.value, label=e.label) for e in STAGE_COLOR_PALETTE]


@router.post("/color", response_model=StageColorOut)
def stage_color(payload: StageColorIn):
    name = str(payload.stage_name).strip() if payload.stage_name else None
    return StageColorOut(stage_name=name, color=get_stage_color(payload.stage_mapping, payload.stage_name))


@router.post("/names", response_model=StageNamesOut)
def list_stage_names(payload: StageColorIn):
    return StageNamesOut(stages=stage_names(payload.stage_mapping))
