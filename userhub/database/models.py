from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

USERS_COLLECTION = "users"

# Fields carrying a unique index in USERS_COLLECTION
UNIQUE_FIELDS = ("username", "email")


@dataclass(frozen=True)
class User:
    id: str
    username: str
    email: str

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(id=str(doc["_id"]), username=doc["username"], email=doc["email"])

    def to_dict(self) -> Dict[str, str]:
        return {"_id": self.id, "username": self.username, "email": self.email}
