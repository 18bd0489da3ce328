from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Sequence

ALL_HASHES = "all"


class TorrentFilter(Enum):
    """State filters understood by qBittorrent's torrent listing."""

    ALL = "all"
    DOWNLOADING = "downloading"
    SEEDING = "seeding"
    COMPLETED = "completed"
    PAUSED = "paused"
    ACTIVE = "active"
    INACTIVE = "inactive"
    RESUMED = "resumed"
    STALLED = "stalled"
    STALLED_UPLOADING = "stalled_uploading"
    STALLED_DOWNLOADING = "stalled_downloading"
    ERRORED = "errored"
    STOPPED = "stopped"
    RUNNING = "running"
    CHECKING = "checking"
    MOVING = "moving"

    @classmethod
    def names(cls) -> Sequence[str]:
        return [member.value for member in cls]


def split_tags(raw_tags: Optional[str]) -> FrozenSet[str]:
    """qBittorrent reports tags as a single comma separated string"""
    if not raw_tags:
        return frozenset()
    return frozenset(tag.strip() for tag in raw_tags.split(",") if tag.strip())


@dataclass(frozen=True)
class Torrent:
    hash: str
    name: str = ""
    state: str = ""
    category: str = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)

    def has_any_tag(self, tags: Iterable[str]) -> bool:
        return not self.tags.isdisjoint(tags)


@dataclass(frozen=True)
class SelectionCriteria:
    remove_all: bool = False
    state_filter: Optional[TorrentFilter] = None
    categories: FrozenSet[str] = frozenset()
    include_tags: FrozenSet[str] = frozenset()
    exclude_tags: FrozenSet[str] = frozenset()
    hashes: FrozenSet[str] = frozenset()

    def accepts_tags(self, torrent: Torrent) -> bool:
        """Tag gating applied to torrents returned by a category query.

        An empty include set admits everything; an empty exclude set rejects nothing.
        Exclusion wins over inclusion.
        """
        if self.include_tags and not torrent.has_any_tag(self.include_tags):
            return False
        if self.exclude_tags and torrent.has_any_tag(self.exclude_tags):
            return False
        return True


class TargetSet:
    """Either every torrent in the client or a concrete set of hashes."""

    def __init__(self, hashes: Iterable[str] = (), is_all: bool = False):
        self.is_all = is_all
        self.hashes: FrozenSet[str] = frozenset() if is_all else frozenset(hashes)

    @classmethod
    def all(cls) -> "TargetSet":
        return cls(is_all=True)

    def is_empty(self) -> bool:
        return not self.is_all and len(self.hashes) == 0

    def as_request(self) -> Sequence[str]:
        if self.is_all:
            return [ALL_HASHES]
        return sorted(self.hashes)

    def __len__(self):
        return len(self.hashes)

    def __contains__(self, item):
        return self.is_all or item in self.hashes

    def __eq__(self, other):
        if isinstance(other, TargetSet):
            return other.is_all == self.is_all and other.hashes == self.hashes
        return False

    def __hash__(self):
        return hash((self.is_all, self.hashes))

    def __repr__(self):
        if self.is_all:
            return "TargetSet(all)"
        return f"TargetSet({sorted(self.hashes)})"
