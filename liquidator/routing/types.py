"""Route types for converting one asset into another."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DirectRoute:
    """Swap through the single pool that pairs source and dest."""

    source: str
    dest: str

    @property
    def path(self) -> list[str]:
        return [self.source, self.dest]

    @property
    def hops(self) -> int:
        return 1


@dataclass(frozen=True)
class SingleHopRoute:
    """Swap source -> intermediate -> dest through two pools.

    All three assets are distinct.
    """

    source: str
    intermediate: str
    dest: str

    def __post_init__(self) -> None:
        if len({self.source, self.intermediate, self.dest}) != 3:
            raise ValueError(
                f"Route assets must be distinct: {self.source}, {self.intermediate}, {self.dest}"
            )

    @property
    def path(self) -> list[str]:
        return [self.source, self.intermediate, self.dest]

    @property
    def hops(self) -> int:
        return 2


SwapRoute = DirectRoute | SingleHopRoute


__all__ = ["DirectRoute", "SingleHopRoute", "SwapRoute"]
