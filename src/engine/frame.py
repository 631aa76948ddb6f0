"""
Frame - staged operations for one tick

An effect returns a Frame; the scheduler replays its operations against the
device sink in order and then commits once. Operations are recorded, not
executed, so effects stay pure and testable without a device.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from models.color import Color
from models.commands import Brightness, ColorTemperature, XYColor
from models.enums import FrameTarget

FrameValue = Union[Color, ColorTemperature, XYColor, Brightness]


@dataclass(frozen=True)
class FrameOp:
    """
    Single staged operation

    target=SEGMENT addresses one segment index, target=GROUP all zones.
    value=None means clear (black, no alpha).
    """
    target: FrameTarget
    value: Optional[FrameValue]
    index: Optional[int] = None

    @property
    def is_clear(self) -> bool:
        return self.value is None


@dataclass
class Frame:
    """
    Ordered list of FrameOps

    Builder methods return self so frames can be written fluently:
        Frame().fill(base).set(2, flash.with_alpha(0.4))
    """
    ops: List[FrameOp] = field(default_factory=list)

    def set(self, index: int, value: FrameValue) -> "Frame":
        self.ops.append(FrameOp(FrameTarget.SEGMENT, value, index))
        return self

    def fill(self, value: FrameValue) -> "Frame":
        self.ops.append(FrameOp(FrameTarget.GROUP, value))
        return self

    def clear(self, index: int) -> "Frame":
        self.ops.append(FrameOp(FrameTarget.SEGMENT, None, index))
        return self

    def clear_all(self) -> "Frame":
        self.ops.append(FrameOp(FrameTarget.GROUP, None))
        return self

    @classmethod
    def cleared(cls) -> "Frame":
        return cls().clear_all()

    @classmethod
    def filled(cls, value: FrameValue) -> "Frame":
        return cls().fill(value)

    def __iter__(self) -> Iterator[FrameOp]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)

    def __bool__(self) -> bool:
        return bool(self.ops)
