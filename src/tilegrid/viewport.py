"""Interaction helpers for a map viewer built on the tile grid.

:class:`PanGesture` tracks pointer-down, move and release events and emits
one accumulated drag per gesture. :class:`MapView` is the immutable
centre/zoom pair a controller keeps and rebuilds grids from.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import NamedTuple, Optional, Tuple, Union

from .config import GridConfig
from .grid import build_grid
from .pan import resolve_pan
from .projection import check_zoom
from .types import GeoCoordinate, TileGrid

logger = logging.getLogger(__name__)


class Idle(NamedTuple):
    pass


class Dragging(NamedTuple):
    start_x: float
    start_y: float
    delta_x: float = 0.0
    delta_y: float = 0.0


DragState = Union[Idle, Dragging]


class PanGesture:
    """Pointer state machine: Idle -> Dragging -> Idle.

    Examples
    --------
    >>> gesture = PanGesture()
    >>> gesture.press(10, 10)
    >>> gesture.move(60, 30)
    >>> gesture.release()
    (50, 20)
    """

    def __init__(self):
        self.state: DragState = Idle()

    @property
    def dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    @property
    def delta(self) -> Tuple[float, float]:
        """Current drag, (0, 0) when idle."""
        if isinstance(self.state, Dragging):
            return self.state.delta_x, self.state.delta_y
        return 0.0, 0.0

    def press(self, x: float, y: float):
        self.state = Dragging(x, y)

    def move(self, x: float, y: float):
        if isinstance(self.state, Dragging):
            self.state = self.state._replace(delta_x=x - self.state.start_x,
                                             delta_y=y - self.state.start_y)

    def release(self) -> Optional[Tuple[float, float]]:
        """End the drag (pointer up or pointer leaving the map).

        Returns
        -------
        tuple of float or None
            Accumulated (dx, dy), or None if no drag was in progress.
        """
        if not isinstance(self.state, Dragging):
            return None
        delta = self.state.delta_x, self.state.delta_y
        self.state = Idle()
        return delta


def step_zoom(zoom: int, step: int = 1, config: GridConfig = None) -> int:
    """Return ``zoom + step`` clamped to the configured zoom range."""
    config = config if config is not None else GridConfig.from_settings()
    return max(config.min_zoom, min(config.max_zoom, zoom + step))


@dataclass(frozen=True)
class MapView:
    """Centre and zoom of the map on screen.

    Parameters
    ----------
    center : GeoCoordinate
        Position at the centre of the viewport.
    zoom : int
        Current zoom level.
    config : GridConfig, optional
        Tile layout. If omitted, built from settings.
    """

    center: GeoCoordinate
    zoom: int
    config: GridConfig = field(default_factory=GridConfig.from_settings)

    def __post_init__(self):
        check_zoom(self.zoom, self.config)

    def grid(self) -> TileGrid:
        """Fetch grid for this view."""
        return build_grid(self.center, self.zoom, self.config.fetch_grid_dimension,
                          self.config)

    def panned(self, dx: float, dy: float) -> "MapView":
        """View after a drag of (dx, dy) pixels.

        A zero drag returns ``self`` so callers can skip refetching.
        """
        if dx == 0 and dy == 0:
            return self
        center = resolve_pan(self.center, self.zoom, dx, dy, self.config).normalized()
        logger.debug("Panning ended with offset dx=%s, dy=%s; new centre %s", dx, dy, center)
        return replace(self, center=center)

    def zoomed(self, step: int) -> "MapView":
        """View zoomed by ``step`` levels, staying inside the zoom range."""
        zoom = step_zoom(self.zoom, step, self.config)
        if zoom == self.zoom:
            return self
        return replace(self, zoom=zoom)


DEFAULT_LOCATION = MapView(GeoCoordinate(48.8584, 2.2945), 17, GridConfig())
