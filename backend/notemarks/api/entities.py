"""Router factory shared by the notes and bookmarks verticals.

Annotations here are evaluated eagerly: FastAPI reads the body and response
models off the nested handlers at definition time.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from notemarks.api.deps import store_dependency
from notemarks.models.common import ItemResponse, ListResponse, MessageResponse
from notemarks.storage.documents_store import DocumentStore
from notemarks.storage.kinds import EntityKind
from notemarks.storage.query import build_query


def update_changes(payload: BaseModel) -> dict[str, Any]:
    changes = payload.model_dump(by_alias=True, exclude_unset=True)
    # an empty title keeps the stored one
    if "title" in changes and not changes["title"]:
        del changes["title"]
    return changes


def build_entity_router(
    kind: EntityKind,
    payload_model: type[BaseModel],
    out_model: type[BaseModel],
    with_create: bool = True,
) -> APIRouter:
    router = APIRouter(prefix=f"/api/{kind.name}", tags=[kind.name])
    get_store = store_dependency(kind)
    not_found = f"{kind.label} not found"

    @router.get("", response_model=ListResponse[out_model])
    def list_entities(
        q: Optional[str] = None,
        tags: Optional[str] = None,
        favorite: Optional[str] = None,
        store: DocumentStore = Depends(get_store),
    ) -> dict:
        docs = store.find(build_query(q=q, tags=tags, favorite=favorite))
        return {"success": True, "count": len(docs), "data": [d.to_dict() for d in docs]}

    @router.get("/{entity_id}", response_model=ItemResponse[out_model])
    def get_entity(entity_id: str, store: DocumentStore = Depends(get_store)) -> dict:
        doc = store.get(entity_id)
        if doc is None:
            raise HTTPException(status_code=404, detail=not_found)
        return {"success": True, "data": doc.to_dict()}

    if with_create:

        @router.post("", response_model=ItemResponse[out_model], status_code=201)
        def create_entity(payload: payload_model, store: DocumentStore = Depends(get_store)) -> dict:
            doc = store.create(payload.model_dump(by_alias=True))
            return {"success": True, "data": doc.to_dict()}

    @router.put("/{entity_id}", response_model=ItemResponse[out_model])
    def update_entity(entity_id: str, payload: payload_model, store: DocumentStore = Depends(get_store)) -> dict:
        doc = store.update(entity_id, update_changes(payload))
        if doc is None:
            raise HTTPException(status_code=404, detail=not_found)
        return {"success": True, "data": doc.to_dict()}

    @router.delete("/{entity_id}", response_model=MessageResponse)
    def delete_entity(entity_id: str, store: DocumentStore = Depends(get_store)) -> dict:
        if not store.delete(entity_id):
            raise HTTPException(status_code=404, detail=not_found)
        return {"success": True, "message": f"{kind.label} deleted successfully"}

    return router
