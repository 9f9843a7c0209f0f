"""Window, scale and reveal state structures."""
from attrs import define, field, frozen
from typing import List


@frozen
class WindowSlot:
    """One minute of the visible window."""

    wind: float = 0.0  # knots, [0, max_speed]
    gust: float = 0.0  # knots, [0, max_speed]
    direction: float = 0.0  # degrees, [0, 360)


@define
class Window:
    """Fixed-length sequence of minute slots, oldest first."""

    slots: List[WindowSlot] = field(factory=list)

    @classmethod
    def zeros(cls, minutes: int) -> "Window":
        """All-zero window of the given length."""
        return cls(slots=[WindowSlot() for _ in range(minutes)])

    def copy(self) -> "Window":
        """Shallow copy; slots themselves are immutable."""
        return Window(slots=list(self.slots))

    @property
    def newest(self) -> WindowSlot:
        return self.slots[-1]

    def __len__(self) -> int:
        return len(self.slots)

    def __getitem__(self, index: int) -> WindowSlot:
        return self.slots[index]


@frozen
class BarHeights:
    """Rendered heights of one slot: gust is the excess stacked on top of wind."""

    wind_height: float
    gust_height: float


@frozen
class ScaleState:
    """Scale of the bar graph derived from the current window."""

    max_gust: float
    grid_levels: List[float]  # positions: fraction of scale, or units in fixed mode
    grid_labels: List[float]  # knots at each grid level
    autoscale: bool = True
    scale: float = 1.0  # divisor for normalized heights (autoscale)
    multiplier: float = 1.0  # units per knot (fixed scale)


@define
class RevealState:
    """Long-lived reveal state; only the RevealScheduler mutates it."""

    displayed: Window
    target: Window
    cursor: int = 0  # number of slots of target already committed to displayed
