from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class ChangeStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    RENAMED = "renamed"
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    COPIED = "copied"


@dataclass(frozen=True)
class ChangeRecord:
    name: str
    status: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EventContext:
    sha: str
    event_name: str
    payload: dict[str, Any]
    owner: str
    repo: str
    client: Any
    server_url: str
    token: str = field(repr=False)


@dataclass(frozen=True)
class ChangedFiles:
    all: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)
    added_modified: list[str] = field(default_factory=list)
