"""
Segment layout - ordered mapping of segment index to device zone id
"""

from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from models.errors import InvalidSegmentLayoutError

DEFAULT_ZONE_IDS = (0, 1, 2, 3)


class SegmentLayout:
    """
    Read-only list of zones addressed by index 0..N-1

    Effects compute values by index; the scheduler translates the index
    to the zone id the device sink understands.

    Example:
        layout = SegmentLayout([0, 1, 2, 3])
        layout.count()        # 4
        layout.id_at(2)       # 2
        for index, zone_id in layout: ...
    """

    def __init__(self, ids: Optional[Sequence[Any]] = None):
        ids = list(DEFAULT_ZONE_IDS if ids is None else ids)
        if not ids:
            raise InvalidSegmentLayoutError("Segment layout needs at least one zone", ids)
        if len(set(ids)) != len(ids):
            raise InvalidSegmentLayoutError("Segment layout has duplicate zone ids", ids)
        self._ids: Tuple[Any, ...] = tuple(ids)

    @property
    def ids(self) -> List[Any]:
        return list(self._ids)

    def count(self) -> int:
        return len(self._ids)

    def id_at(self, index: int) -> Any:
        """Zone id for segment index (IndexError when out of range)"""
        if not 0 <= index < len(self._ids):
            raise IndexError(f"Segment index {index} out of range 0..{len(self._ids) - 1}")
        return self._ids[index]

    def for_each(self, fn: Callable[[int, Any], None]) -> None:
        """Call fn(index, zone_id) for every segment in ascending order"""
        for index, zone_id in enumerate(self._ids):
            fn(index, zone_id)

    @property
    def center(self) -> float:
        return (len(self._ids) - 1) / 2

    def __iter__(self) -> Iterator[Tuple[int, Any]]:
        return iter(enumerate(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"SegmentLayout(ids={list(self._ids)})"
