# src/todo_keeper/accounts/models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Account:
    username: str
    credential_digest: str
    created_at: float = 0.0

    def to_record(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "credential_digest": self.credential_digest,
            "created_at": self.created_at,
        }

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Account:
        return cls(
            username=str(rec["username"]),
            credential_digest=str(rec.get("credential_digest") or ""),
            created_at=float(rec.get("created_at") or 0.0),
        )
