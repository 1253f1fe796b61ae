"""
Border openings ("exits") of a cave.

Each side of an Exit record is in one of three states:

- ``None``: disabled, the side stays solid (e.g. edge of a cave map)
- ``()``: free, openings are generated for this side
- non-empty tuple: constrained, exactly these offsets are opened

Offsets run along the edge: x for top and bottom, y for left and right.
Top is the row ``y = height - 1`` and bottom is ``y = 0``.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, Iterable, Optional, Tuple

import structlog

from .alea_prng import AleaPRNG
from .grid import FLOOR, Grid

logger = structlog.get_logger()

Offsets = Optional[Tuple[int, ...]]

MIN_OPENING_LENGTH = 3


class Side(IntEnum):
    """Grid edges, in the order exits are resolved."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3


def _as_offsets(values: Optional[Iterable[int]]) -> Offsets:
    if values is None:
        return None
    return tuple(int(v) for v in values)


@dataclass(frozen=True)
class Exit:
    """Openings on the four sides of a cave."""

    top: Offsets = ()
    right: Offsets = ()
    bottom: Offsets = ()
    left: Offsets = ()

    def __post_init__(self):
        for name in ("top", "right", "bottom", "left"):
            object.__setattr__(self, name, _as_offsets(getattr(self, name)))

    @classmethod
    def free(cls) -> "Exit":
        """All four sides free to generate."""
        return cls((), (), (), ())

    @classmethod
    def closed(cls) -> "Exit":
        """All four sides disabled."""
        return cls(None, None, None, None)

    def get(self, side: Side) -> Offsets:
        return getattr(self, side.name.lower())

    def with_side(self, side: Side, offsets: Optional[Iterable[int]]) -> "Exit":
        return replace(self, **{side.name.lower(): _as_offsets(offsets)})

    def as_dict(self) -> Dict[str, Offsets]:
        return {side.name.lower(): self.get(side) for side in Side}


def edge_length(grid: Grid, side: Side) -> int:
    """Number of tiles along the given edge."""
    if side in (Side.TOP, Side.BOTTOM):
        return grid.width
    return grid.height


def generate_side(rng: AleaPRNG, length: int) -> Tuple[int, ...]:
    """
    Generate one or two openings for an edge of ``length`` tiles.

    Each opening starts at a random interior offset and spans a random
    number of tiles, clipped to the last interior offset. Ranges that
    would be empty on short edges collapse to their lower bound.

    Returns:
        Sorted, de-duplicated offsets covered by the openings
    """
    last = length - 2
    offsets = set()

    for _ in range(rng.next_int(1, 3)):
        start = rng.next_int(1, last - MIN_OPENING_LENGTH)
        size = rng.next_int(MIN_OPENING_LENGTH, last)
        end = min(start + size, last)
        offsets.update(range(start, end + 1))

    return tuple(sorted(offsets))


def side_position(grid: Grid, side: Side, offset: int) -> Tuple[int, int]:
    """Map an along-edge offset to the border tile it opens."""
    if side == Side.TOP:
        return offset, grid.height - 1
    if side == Side.RIGHT:
        return grid.width - 1, offset
    if side == Side.BOTTOM:
        return offset, 0
    return 0, offset


def apply_side(grid: Grid, side: Side, offsets: Offsets) -> int:
    """
    Force the border tiles of ``offsets`` on ``side`` to floor.

    Disabled sides and off-grid offsets are skipped.

    Returns:
        Number of tiles opened
    """
    if offsets is None:
        return 0

    opened = 0
    for offset in offsets:
        x, y = side_position(grid, side, offset)
        if not grid.in_bounds(x, y):
            continue
        grid.tiles[x, y] = FLOOR
        opened += 1
    return opened


def resolve_exits(grid: Grid, rng: AleaPRNG, exits: Optional[Exit] = None) -> Exit:
    """
    Generate openings for free sides and carve every side into the grid.

    Args:
        grid: Grid to open in place
        rng: Generation PRNG
        exits: Constraints, ``None`` means every side is free

    Returns:
        Resolved Exit record with free sides replaced by generated offsets
    """
    resolved = exits if exits is not None else Exit.free()

    for side in Side:
        offsets = resolved.get(side)
        if offsets is not None and len(offsets) == 0:
            resolved = resolved.with_side(side, generate_side(rng, edge_length(grid, side)))

    for side in Side:
        apply_side(grid, side, resolved.get(side))

    logger.debug("Exits resolved", **{k: (len(v) if v is not None else None) for k, v in resolved.as_dict().items()})
    return resolved
