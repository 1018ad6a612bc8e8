import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notemarks.api import bookmarks, notes
from notemarks.config import Settings
from notemarks.errors import register_error_handlers
from notemarks.storage.documents_store import DocumentStore
from notemarks.storage.kinds import BOOKMARKS, NOTES
from notemarks.utils.logging_config import setup_logging
from notemarks.utils.page_metadata import RegexMetadataEnricher

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stores = {kind.name: DocumentStore(settings.data_dir, kind) for kind in (NOTES, BOOKMARKS)}
        for store in stores.values():
            store.open()
        app.state.stores = stores
        app.state.enricher = RegexMetadataEnricher(
            timeout=settings.metadata_timeout_seconds,
            user_agent=settings.metadata_user_agent,
        )
        logger.info("Notemarks API started, data dir %s", settings.data_dir)
        try:
            yield
        finally:
            await app.state.enricher.aclose()
            for store in stores.values():
                store.close()

    app = FastAPI(title="Notemarks API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(notes.router)
    app.include_router(bookmarks.router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


def run() -> None:
    import uvicorn

    uvicorn.run("notemarks.main:create_app", factory=True, host="0.0.0.0", port=5000)
