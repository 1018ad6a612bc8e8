from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

EntityT = TypeVar("EntityT")



class ListResponse(BaseModel, Generic[EntityT]):
    success: bool = True
    count: int
    data: list[EntityT]


class ItemResponse(BaseModel, Generic[EntityT]):
    success: bool = True
    data: EntityT


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorDetail(BaseModel):
    field: str
    message: str
    location: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[list[ErrorDetail]] = None
