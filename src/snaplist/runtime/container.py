from __future__ import annotations

from typing import Any, Mapping

from lagom import Container, Singleton

from snaplist.scroll.coordinator import ScrollCoordinator, ScrollPort
from snaplist.scroll.geometry import SnapGeometry
from snaplist.utilities.logging import get_logger
from snaplist.window.reducer import KeyFunction, identity_key
from snaplist.window.settings import WindowSettings
from snaplist.window.source import ItemSource
from snaplist.window.store import WindowedListStore

logger = get_logger(__name__)

RuntimeContainer = Container


def _bind(
    container: RuntimeContainer,
    overrides: Mapping[type[Any], object] | None,
    key: type[Any],
    value: object,
) -> None:
    if overrides and key in overrides:
        container[key] = overrides[key]
        logger.debug("Applied Lagom override for %s.", key)
        return
    if key in container.defined_types:
        logger.debug("Lagom already defined %s; skipping registration.", key)
        return
    container[key] = value
    logger.debug("Registered Lagom provider for %s.", key)


def _build_window_settings(_: RuntimeContainer) -> WindowSettings:
    return WindowSettings.from_environment()


def build_snap_list_container(
    *,
    source: ItemSource[Any],
    init_value: Any,
    port: ScrollPort,
    viewport_extent: float,
    key: KeyFunction[Any] = identity_key,
    overrides: Mapping[type[Any], object] | None = None,
    container: RuntimeContainer | None = None,
) -> RuntimeContainer:
    """Wire a store and its scroll coordinator around ``source``.

    The store is created on first resolution, so resolve it from inside the
    event loop that should run its fetches.
    """

    resolver = container if container is not None else RuntimeContainer()

    def _build_geometry(_: RuntimeContainer) -> SnapGeometry:
        return SnapGeometry.from_environment(viewport_extent=viewport_extent)

    def _build_store(resolver: RuntimeContainer) -> WindowedListStore[Any]:
        return WindowedListStore(
            init_value=init_value,
            source=resolver[ItemSource],
            key=key,
            settings=resolver[WindowSettings],
        )

    def _build_coordinator(resolver: RuntimeContainer) -> ScrollCoordinator[Any]:
        return ScrollCoordinator(
            resolver[WindowedListStore],
            resolver[ScrollPort],
            resolver[SnapGeometry],
        )

    logger.debug(
        "Configuring snap list container with overrides=%s.",
        set(overrides.keys()) if overrides else set(),
    )
    _bind(resolver, overrides, ItemSource, source)
    _bind(resolver, overrides, ScrollPort, port)
    _bind(resolver, overrides, WindowSettings, Singleton(_build_window_settings))
    _bind(resolver, overrides, SnapGeometry, Singleton(_build_geometry))
    _bind(resolver, overrides, WindowedListStore, Singleton(_build_store))
    _bind(resolver, overrides, ScrollCoordinator, Singleton(_build_coordinator))
    return resolver
