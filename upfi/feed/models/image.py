"""Gallery image data model."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Image(BaseModel):
    """Uploaded image as returned by the gallery API.

    ``created_at`` is a numeric timestamp; the API sends it as ``ts``.
    """

    id: str = Field(..., min_length=1)
    title: str
    description: str
    url: str = Field(..., min_length=1)
    created_at: float = Field(
        ..., validation_alias=AliasChoices("ts", "createdAt", "created_at")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)
