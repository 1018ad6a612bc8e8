from typing import Callable

from fastapi import Request

from notemarks.storage.documents_store import DocumentStore
from notemarks.storage.kinds import EntityKind
from notemarks.utils.page_metadata import MetadataEnricher


def store_dependency(kind: EntityKind) -> Callable[[Request], DocumentStore]:
    def get_store(request: Request) -> DocumentStore:
        return request.app.state.stores[kind.name]

    get_store.__name__ = f"get_{kind.name}_store"
    return get_store


def get_enricher(request: Request) -> MetadataEnricher:
    return request.app.state.enricher
