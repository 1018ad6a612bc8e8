from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EntityKind:
    """Per-kind descriptor for the generic document store.

    `text_fields` are the fields covered by the text index, `required` the
    fields that must be non-empty on every persisted document, and `defaults`
    the values a new document starts from before the submitted fields apply.
    """

    name: str
    label: str
    fields: tuple[str, ...]
    text_fields: tuple[str, ...]
    required: tuple[str, ...]
    defaults: dict[str, Any] = field(default_factory=dict)

    def new_defaults(self) -> dict[str, Any]:
        # fresh containers per document
        return {k: (v.copy() if isinstance(v, (list, dict)) else v) for k, v in self.defaults.items()}


NOTES = EntityKind(
    name="notes",
    label="Note",
    fields=("title", "content", "tags", "isFavorite"),
    text_fields=("title", "content", "tags"),
    required=("title", "content"),
    defaults={"tags": [], "isFavorite": False},
)

BOOKMARKS = EntityKind(
    name="bookmarks",
    label="Bookmark",
    fields=("title", "url", "description", "tags", "isFavorite", "metadata"),
    text_fields=("title", "description", "tags", "url"),
    required=("title", "url"),
    defaults={"description": None, "tags": [], "isFavorite": False, "metadata": {}},
)
