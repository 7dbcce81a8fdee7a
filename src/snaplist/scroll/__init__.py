from snaplist.scroll.coordinator import ScrollCoordinator, ScrollPort
from snaplist.scroll.geometry import SnapGeometry

__all__ = ["ScrollCoordinator", "ScrollPort", "SnapGeometry"]
