"""
Novelty detection. Pure, no I/O.

Given a Snapshot (freshest first) and the cursor (sequence of the last
seen record), work out which records are new and what the cursor moves to.
"""

from dataclasses import dataclass, field

from models import Record


class EmptySnapshot(Exception):
    """No records in the snapshot. The cycle skips detection."""


@dataclass
class Detection:
    new_records: list[Record] = field(default_factory=list)  # oldest first
    cursor: int = 0                                          # freshest sequence


def detect_new(snapshot: list[Record], cursor: int) -> Detection:
    """
    Collect records from the front of the snapshot until the cursor's
    record is hit (excluded) or the snapshot runs out, then reverse so
    delivery is oldest first.

    If the cursor's record isn't on the page at all, the whole page is
    returned. Gaps wider than the page are not detected.

    The returned cursor is always the freshest record's sequence, even
    when nothing is new.
    """
    if not snapshot:
        raise EmptySnapshot("snapshot has no records")

    freshest = snapshot[0]
    if freshest.item_sequence == cursor:
        return Detection(new_records=[], cursor=cursor)

    fresh: list[Record] = []
    for record in snapshot:
        if record.item_sequence == cursor:
            break
        fresh.append(record)
    fresh.reverse()

    return Detection(new_records=fresh, cursor=freshest.item_sequence)
