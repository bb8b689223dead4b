from pydantic import BaseModel, StrictInt, StrictStr


class AvatarValueIn(BaseModel):
    # A raw file reference (ID or slug), a previously issued access URL, or null
    value: StrictInt | StrictStr | None = None


class AvatarReferenceOut(BaseModel):
    file_reference: int | str | None = None


class AvatarUrlOut(BaseModel):
    file_reference: int | str | None = None
    url: str | None = None
