import json
import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

from notemarks.storage.kinds import EntityKind
from notemarks.storage.query import RESULT_LIMIT, EntityQuery

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("title", "content", "url", "description")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    # fixed width so timestamps sort as strings
    return dt.isoformat(timespec="microseconds")


def _parse_id(entity_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(entity_id))
    except ValueError:
        return None


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


def normalize_tags(tags: Optional[list[str]]) -> list[str]:
    return [t.strip().lower() for t in tags or []]


class DocumentValidationError(ValueError):
    """A document would break a store invariant (e.g. a required field is empty)."""


@dataclass(frozen=True)
class Document:
    id: uuid.UUID
    kind: EntityKind
    fields: dict[str, Any]
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": str(self.id)}
        for name in self.kind.fields:
            out[name] = self.fields.get(name)
        out["createdAt"] = self.created_at
        out["updatedAt"] = self.updated_at
        return out

    @classmethod
    def from_dict(cls, kind: EntityKind, raw: dict[str, Any]) -> "Document":
        fields = kind.new_defaults()
        fields.update({k: raw[k] for k in kind.fields if k in raw})
        return cls(
            id=uuid.UUID(raw["id"]),
            kind=kind,
            fields=fields,
            created_at=raw["createdAt"],
            updated_at=raw["updatedAt"],
        )


class DocumentStore:
    """JSON-file document store for one entity kind.

    Layout: <base_dir>/<kind.name>/<id>.json, one document per file, each
    write going through a temp file and an atomic rename. Writes are
    last-write-wins; there is no version check.
    """

    def __init__(self, base_dir: Path, kind: EntityKind):
        self.base_dir = base_dir
        self.kind = kind
        self._last_created: Optional[datetime] = None
        self._open = False

    @property
    def collection_dir(self) -> Path:
        return self.base_dir / self.kind.name

    def _path(self, doc_id: uuid.UUID) -> Path:
        return self.collection_dir / f"{doc_id}.json"

    def open(self) -> None:
        self.collection_dir.mkdir(parents=True, exist_ok=True)
        docs = self._load_all()
        if docs:
            self._last_created = max(datetime.fromisoformat(d.created_at) for d in docs)
        self._open = True
        logger.info("Opened %s store at %s (%d documents)", self.kind.name, self.collection_dir, len(docs))

    def close(self) -> None:
        self._open = False
        logger.info("Closed %s store", self.kind.name)

    def _ensure_open(self) -> None:
        if not self._open:
            raise RuntimeError(f"{self.kind.name} store is not open")

    def _next_created_at(self) -> datetime:
        # strictly increasing so newest-first ordering never ties
        now = _utc_now()
        if self._last_created is not None and now <= self._last_created:
            now = self._last_created + timedelta(microseconds=1)
        self._last_created = now
        return now

    def _normalize(self, fields: dict[str, Any]) -> dict[str, Any]:
        out = dict(fields)
        for name in _STRING_FIELDS:
            if isinstance(out.get(name), str):
                out[name] = out[name].strip()
        out["tags"] = normalize_tags(out.get("tags"))
        out["isFavorite"] = bool(out.get("isFavorite", False))
        for name in self.kind.required:
            if not out.get(name):
                raise DocumentValidationError(f"{self.kind.label} {name} is required")
        return out

    def _read(self, path: Path) -> Document:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return Document.from_dict(self.kind, raw)

    def _load_all(self) -> list[Document]:
        if not self.collection_dir.exists():
            return []
        out: list[Document] = []
        for p in self.collection_dir.glob("*.json"):
            try:
                out.append(self._read(p))
            except (OSError, ValueError, KeyError, TypeError) as exc:
                logger.warning("Skipping unreadable document %s: %s", p.name, exc)
        return out

    def create(self, fields: dict[str, Any]) -> Document:
        self._ensure_open()
        data = self.kind.new_defaults()
        data.update({k: v for k, v in fields.items() if k in self.kind.fields and v is not None})
        data = self._normalize(data)

        now = _iso(self._next_created_at())
        doc = Document(id=uuid.uuid4(), kind=self.kind, fields=data, created_at=now, updated_at=now)
        _atomic_write_json(self._path(doc.id), doc.to_dict())
        logger.debug("Created %s %s", self.kind.label, doc.id)
        return doc

    def get(self, entity_id: str) -> Optional[Document]:
        self._ensure_open()
        doc_id = _parse_id(entity_id)
        if doc_id is None:
            return None
        path = self._path(doc_id)
        if not path.exists():
            return None
        return self._read(path)

    def update(self, entity_id: str, changes: dict[str, Any]) -> Optional[Document]:
        existing = self.get(entity_id)
        if existing is None:
            return None

        data = dict(existing.fields)
        data.update({k: v for k, v in changes.items() if k in self.kind.fields})
        data = self._normalize(data)

        doc = Document(
            id=existing.id,
            kind=self.kind,
            fields=data,
            created_at=existing.created_at,
            updated_at=_iso(_utc_now()),
        )
        _atomic_write_json(self._path(doc.id), doc.to_dict())
        return doc

    def delete(self, entity_id: str) -> bool:
        self._ensure_open()
        doc_id = _parse_id(entity_id)
        if doc_id is None:
            return False
        try:
            self._path(doc_id).unlink()
        except FileNotFoundError:
            return False
        logger.debug("Deleted %s %s", self.kind.label, doc_id)
        return True

    def find(self, query: EntityQuery, limit: int = RESULT_LIMIT) -> list[Document]:
        self._ensure_open()
        hits = [d for d in self._load_all() if query.matches(self.kind, d.fields)]
        hits.sort(key=lambda d: d.created_at, reverse=True)
        return hits[:limit]
