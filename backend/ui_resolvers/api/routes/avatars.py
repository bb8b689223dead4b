from fastapi import APIRouter, Depends

from ui_resolvers.api.deps import get_provider
from ui_resolvers.schemas.avatar import AvatarReferenceOut, AvatarUrlOut, AvatarValueIn
from ui_resolvers.services.avatar import extract_avatar_file_reference, resolve_avatar_display_url
from ui_resolvers.services.files_provider import FileAccessProvider

router = APIRouter()


@router.post("/reference", response_model=AvatarReferenceOut)
def avatar_reference(payload: AvatarValueIn):
    return AvatarReferenceOut(file_reference=extract_avatar_file_reference(payload.value))


@router.post("/url", response_model=AvatarUrlOut)
async def avatar_url(payload: AvatarValueIn, provider: FileAccessProvider = Depends(get_provider)):
    # Provider failures come back as url=null, never as a 5xx
    return AvatarUrlOut(
        file_reference=extract_avatar_file_reference(payload.value),
        url=await resolve_avatar_display_url(payload.value, provider),
    )
