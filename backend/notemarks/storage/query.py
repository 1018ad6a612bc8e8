from dataclasses import dataclass
from typing import Any, Optional

from notemarks.storage.kinds import EntityKind
from notemarks.storage.text_search import TextSearch

# Hard cap on list results; there is no offset parameter.
RESULT_LIMIT = 50


@dataclass(frozen=True)
class EntityQuery:
    text: Optional[TextSearch] = None
    tags: Optional[tuple[str, ...]] = None
    favorite_only: bool = False

    def matches(self, kind: EntityKind, doc: dict[str, Any]) -> bool:
        if self.favorite_only and doc.get("isFavorite") is not True:
            return False
        if self.tags is not None and not set(self.tags).intersection(doc.get("tags") or []):
            return False
        if self.text is not None and not self.text.matches(indexed_text(kind, doc)):
            return False
        return True


def indexed_text(kind: EntityKind, doc: dict[str, Any]) -> str:
    parts: list[str] = []
    for name in kind.text_fields:
        value = doc.get(name)
        if isinstance(value, list):
            parts.append(" ".join(str(v) for v in value))
        elif value:
            parts.append(str(value))
    # newline keeps phrases from spanning two fields
    return "\n".join(parts)


def build_query(q: str | None = None, tags: str | None = None, favorite: str | None = None) -> EntityQuery:
    """Translate the list endpoint's filter parameters into a store query.

    - `q`: free text, handed to the store's text search when non-empty.
    - `tags`: comma-separated; tokens are trimmed and lower-cased and any of
      them may match. Empty tokens are kept as filter values.
    - `favorite`: only the literal string "true" restricts to favorites.
    """
    text = TextSearch.parse(q) if q else None
    tag_values = tuple(t.strip().lower() for t in tags.split(",")) if tags else None
    return EntityQuery(text=text, tags=tag_values, favorite_only=favorite == "true")
