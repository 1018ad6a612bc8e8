import re
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

# Scheme-optional hostname.tld with an optional path; no query strings.
URL_PATTERN = re.compile(r"^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)/?$", re.IGNORECASE)


class BookmarkIn(BaseModel):
    """Body of POST and PUT /api/bookmarks. An empty title asks for auto-fetch on create."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    url: str = Field(min_length=1)
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    tags: list[Annotated[str, Field(max_length=50)]] = Field(default_factory=list)
    is_favorite: StrictBool = Field(default=False, alias="isFavorite")

    @field_validator("url")
    @classmethod
    def url_must_look_like_a_url(cls, v: str) -> str:
        if not URL_PATTERN.match(v):
            raise ValueError("Please enter a valid URL")
        return v


class BookmarkOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    url: str
    description: Optional[str] = None
    tags: list[str]
    is_favorite: bool = Field(alias="isFavorite")
    metadata: dict[str, Optional[str]] = Field(default_factory=dict)
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
