"""
Core data types. No behavior, just shapes.
"""

from dataclasses import dataclass
from enum import Enum


class VideoKind(Enum):
    ONDEMAND = "VOD"
    LIVE = "LIVE"


class ChannelKind(Enum):
    STANDARD = "BASIC"
    PREMIUM = "PLUS"


@dataclass(frozen=True)
class Record:
    """A single video from the feed. Immutable once extracted."""
    item_id: str = ""               # video path, e.g. /video/12345
    item_sequence: int = 0          # upstream sequence, the novelty key
    title: str = ""
    kind: VideoKind = VideoKind.ONDEMAND
    thumbnail: str | None = None    # absent for some live streams
    group_id: str = ""              # channel path
    group_sequence: int = 0
    group_name: str = ""
    group_kind: ChannelKind = ChannelKind.STANDARD

    @property
    def is_live(self) -> bool:
        return self.kind is VideoKind.LIVE

    def __repr__(self) -> str:
        return f"Record({self.item_sequence}, {self.group_name}, {self.title[:50]})"
