"""Turn an on-screen drag into a new map centre."""
import logging

from .config import GridConfig
from .projection import to_geo_coordinate, to_tile_space
from .types import GeoCoordinate, TileCoordinate, require_finite

logger = logging.getLogger(__name__)


def resolve_pan(current: GeoCoordinate, zoom: int, dx: float, dy: float,
                config: GridConfig = None) -> GeoCoordinate:
    """Centre reached after dragging the map content by (dx, dy) pixels.

    Dragging the content right (positive ``dx``) or down (positive ``dy``)
    moves the centre toward lower tile x or y. The returned longitude is
    not wrapped.

    Parameters
    ----------
    current : GeoCoordinate
        Centre before the drag.
    zoom : int
        Zoom level the drag happened at.
    dx, dy : float
        Accumulated drag in screen pixels.
    config : GridConfig, optional
        Tile layout. If None, built from settings.

    Returns
    -------
    GeoCoordinate
        New centre.
    """
    config = config if config is not None else GridConfig.from_settings()
    require_finite("dx", dx)
    require_finite("dy", dy)
    tile = to_tile_space(current, zoom, config)
    moved = TileCoordinate(tile.x - dx / config.tile_size,
                           tile.y - dy / config.tile_size)
    new_center = to_geo_coordinate(moved, zoom, config)
    logger.debug("Pan by (%s, %s) px moved centre %s -> %s", dx, dy, current, new_center)
    return new_center
