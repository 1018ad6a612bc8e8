from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class NoteIn(BaseModel):
    """Body of POST and PUT /api/notes."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=5000)
    tags: list[Annotated[str, Field(max_length=50)]] = Field(default_factory=list)
    is_favorite: StrictBool = Field(default=False, alias="isFavorite")


class NoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    tags: list[str]
    is_favorite: bool = Field(alias="isFavorite")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
