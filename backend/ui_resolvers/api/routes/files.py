from fastapi import APIRouter, Depends

from ui_resolvers.api.deps import get_file_url_cache, get_provider
from ui_resolvers.schemas.files import RenderHtmlIn, RenderHtmlOut
from ui_resolvers.services.file_references import FileUrlCache, collect_file_ids, render_file_references
from ui_resolvers.services.files_provider import FileAccessProvider

router = APIRouter()


@router.post("/render", response_model=RenderHtmlOut)
async def render_html(
    payload: RenderHtmlIn,
    provider: FileAccessProvider = Depends(get_provider),
    cache: FileUrlCache = Depends(get_file_url_cache),
):
    html = await render_file_references(payload.html, provider, cache)
    return RenderHtmlOut(html=html, file_ids=collect_file_ids(html))
