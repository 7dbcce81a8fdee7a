from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from snaplist.utilities.env import Configuration


@dataclass(frozen=True, slots=True)
class SnapGeometry:
    """Main-axis layout of a snap list.

    Items sit in equal slots of ``item_extent + item_spacing``. The list is
    padded at both ends so the first and last items can reach the viewport
    centre.
    """

    item_extent: float
    item_spacing: float
    viewport_extent: float
    padding_start: float = 0.0

    def __post_init__(self) -> None:
        if self.item_extent <= 0:
            raise ValueError("item_extent must be positive")
        if self.item_spacing < 0:
            raise ValueError("item_spacing must be non-negative")
        if self.viewport_extent < 0:
            raise ValueError("viewport_extent must be non-negative")

    @classmethod
    def from_environment(
        cls,
        *,
        viewport_extent: float,
        padding_start: float = 0.0,
    ) -> SnapGeometry:
        return cls(
            item_extent=Configuration.item_extent(),
            item_spacing=Configuration.item_spacing(),
            viewport_extent=viewport_extent,
            padding_start=padding_start,
        )

    @property
    def slot_extent(self) -> float:
        return self.item_extent + self.item_spacing

    @property
    def edge_padding(self) -> float:
        return max(0.0, self.viewport_extent / 2 - self.slot_extent / 2)

    def with_viewport(self, viewport_extent: float) -> SnapGeometry:
        return dataclasses.replace(self, viewport_extent=viewport_extent)

    def content_center(self, index: int) -> float:
        return index * self.slot_extent + self.item_spacing / 2 + self.item_extent / 2

    def offset_for_index(self, index: int) -> float:
        """Scroll offset that centres item ``index`` in the viewport."""

        return (
            self.padding_start
            + self.edge_padding
            + self.content_center(index)
            - self.viewport_extent / 2
        )

    def nearest_index(self, offset: float, count: int) -> int | None:
        """Index of the item whose centre is closest to the viewport centre."""

        if count <= 0:
            return None
        center = offset + self.viewport_extent / 2 - self.padding_start - self.edge_padding
        closest = 0
        min_distance = float("inf")
        for index in range(count):
            distance = abs(self.content_center(index) - center)
            if distance < min_distance:
                min_distance = distance
                closest = index
        return closest

    def compensation(self, shift: int) -> float:
        """Offset delta that keeps content still after ``shift`` slots were inserted."""

        return shift * self.slot_extent
