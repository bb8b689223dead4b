from pydantic import BaseModel, Field


class FileUrlOut(BaseModel):
    url: str | None = None
    file_id: int | str | None = None
    expires_in_seconds: int | None = None


class RenderHtmlIn(BaseModel):
    html: str = Field("", max_length=2_000_000)


class RenderHtmlOut(BaseModel):
    html: str
    file_ids: list[int] = Field(default_factory=list)
