from notemarks.api.entities import build_entity_router
from notemarks.models.notes import NoteIn, NoteOut
from notemarks.storage.kinds import NOTES

router = build_entity_router(NOTES, NoteIn, NoteOut)
