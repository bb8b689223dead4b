from fastapi import APIRouter
from ui_resolvers.api.routes import avatars, files, stages

router = APIRouter()
router.include_router(avatars.router, prefix="/avatars", tags=["avatars"])
router.include_router(stages.router, prefix="/stages", tags=["stages"])
router.include_router(files.router, prefix="/files", tags=["files"])
