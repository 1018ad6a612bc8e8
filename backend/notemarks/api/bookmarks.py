import logging

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool

from notemarks.api.deps import get_enricher, store_dependency
from notemarks.api.entities import build_entity_router
from notemarks.models.bookmarks import BookmarkIn, BookmarkOut
from notemarks.models.common import ItemResponse
from notemarks.storage.documents_store import DocumentStore
from notemarks.storage.kinds import BOOKMARKS
from notemarks.utils.page_metadata import MetadataEnricher

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200

router = build_entity_router(BOOKMARKS, BookmarkIn, BookmarkOut, with_create=False)


@router.post("", response_model=ItemResponse[BookmarkOut], status_code=201)
async def create_bookmark(
    payload: BookmarkIn,
    store: DocumentStore = Depends(store_dependency(BOOKMARKS)),
    enricher: MetadataEnricher = Depends(get_enricher),
) -> dict:
    fields = payload.model_dump(by_alias=True)

    # Auto-fetch title if not provided; the raw URL is the last resort.
    if not payload.title:
        fetched = await enricher.enrich(payload.url)
        if fetched is not None and fetched.fetched_title:
            fields["title"] = fetched.fetched_title[:TITLE_MAX_LENGTH]
            fields["metadata"] = fetched.to_dict()
        else:
            logger.info("No title fetched for %s, using the URL", payload.url)
            fields["title"] = payload.url[:TITLE_MAX_LENGTH]

    doc = await run_in_threadpool(store.create, fields)
    return {"success": True, "data": doc.to_dict()}
