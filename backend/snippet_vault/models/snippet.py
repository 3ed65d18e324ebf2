"""
Snippet Vault Backend - Snippet Document Model
===============================================

What:  The stored snippet record and its mapping to/from MongoDB documents.
How:   A plain dataclass. `to_document()` builds the insert payload (no `_id`,
       the server assigns it); `from_document()` reads a stored document and
       renders the ObjectId as its hex string.
Who:   Used by SnippetRepository only. Routes see `SnippetResponse` instead.

Stored document shape (collection `snippets`):
    {
        "_id":       ObjectId("65f1c0..."),
        "title":     "Hello",
        "language":  "js",
        "code":      "console.log(1)",
        "createdAt": ISODate("2024-03-13T09:41:00Z")
    }
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class Snippet:
    """A code snippet. Immutable once stored; only deletion changes the collection."""

    title: str
    language: str
    code: str
    created_at: Optional[datetime] = field(default_factory=lambda: datetime.now(timezone.utc))
    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "language": self.language,
            "code": self.code,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Snippet":
        created_at = doc.get("createdAt")
        if isinstance(created_at, datetime) and created_at.tzinfo is None:
            # Documents read without tz_aware come back naive but are UTC
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=str(doc["_id"]),
            title=str(doc.get("title", "")),
            language=str(doc.get("language", "")),
            code=str(doc.get("code", "")),
            created_at=created_at,
        )

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, title='{self.title}', language='{self.language}')>"
