"""
Position ordering for children of one parent (cards of a list, lists of a board)

Display order is always "all children of the parent sorted by position".
Position is a derived index: every mutation path renumbers the affected
parent through resequence() instead of patching positions by hand.
"""
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence, Tuple


def ordering_key(entity: Any) -> Tuple[int, datetime, int]:
    """Sort key: position first, then creation time and id as tie-breakers"""
    position = entity.position if entity.position is not None else 0
    created_at = entity.created_at or datetime.min
    entity_id = entity.id or 0
    return position, created_at, entity_id


def sort_by_position(entities: Iterable[Any]) -> List[Any]:
    """Return the entities in display order"""
    return sorted(entities, key=ordering_key)


def clamp_index(index: Optional[int], size: int) -> int:
    """Clamp a requested index into [0, size]; None means append"""
    if index is None or index > size:
        return size
    if index < 0:
        return 0
    return index


def _same_entity(entity: Any, pinned: Optional[Any]) -> bool:
    if pinned is None:
        return False
    if entity is pinned:
        return True
    return pinned.id is not None and entity.id == pinned.id


def resequence(
    entities: Sequence[Any],
    pinned: Optional[Any] = None,
    index: Optional[int] = None,
) -> List[Any]:
    """
    Renumber entities to a dense 0..n-1 ordering

    Args:
        entities: All children of one parent (may or may not include pinned)
        pinned: Entity to place explicitly, e.g. the card being moved
        index: Requested index for the pinned entity. Out of range values are
               clamped: past the end appends, negative inserts first.
               Entities already at or after that index shift down by one.

    Returns:
        The entities whose position changed, in display order
    """
    ordered = sort_by_position(e for e in entities if not _same_entity(e, pinned))

    if pinned is not None:
        ordered.insert(clamp_index(index, len(ordered)), pinned)

    changed = []
    for new_position, entity in enumerate(ordered):
        if entity.position != new_position:
            entity.position = new_position
            changed.append(entity)

    return changed


def is_dense(entities: Iterable[Any]) -> bool:
    """True if positions are exactly 0..n-1 without duplicates"""
    positions = sorted(entity.position for entity in entities)
    return positions == list(range(len(positions)))
