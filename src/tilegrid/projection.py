"""Spherical Web Mercator conversions between degrees and tile space.

At zoom ``z`` the world is a ``2**z`` by ``2**z`` grid of unit squares with
tile (0, 0) in the north-west corner, x growing eastward and y southward.
Results are fractional so callers keep the sub-tile position; floor them
explicitly to address a tile.

Neither direction wraps or clamps. Latitudes close to the poles make the
forward formula diverge and the resulting inf/NaN is returned unchanged.
"""
import math
from typing import Tuple

import numpy as np
from pyproj import Transformer

from .config import GridConfig
from .types import GeoCoordinate, InvalidArgumentError, TileCoordinate

WEBMERCATOR_RADIUS = 6378137.0

# Web Mercator transformer (lon/lat to x/y meters)
_transformer_to_webmerc = Transformer.from_crs(
    "EPSG:4326", "EPSG:3857", always_xy=True
)


def check_zoom(zoom, config: GridConfig) -> int:
    """Return ``zoom`` if it is an int inside the configured range.

    Raises
    ------
    InvalidArgumentError
        For non-integers (bools included) and out of range levels.
    """
    if isinstance(zoom, bool) or not isinstance(zoom, (int, np.integer)):
        raise InvalidArgumentError(f"zoom must be an integer, got {zoom!r}")
    if not config.min_zoom <= zoom <= config.max_zoom:
        raise InvalidArgumentError(
            f"zoom {zoom} outside [{config.min_zoom}, {config.max_zoom}]")
    return int(zoom)


def to_tile_space(coord: GeoCoordinate, zoom: int, config: GridConfig = None) -> TileCoordinate:
    """Project a geographic position to fractional tile coordinates.

    Parameters
    ----------
    coord : GeoCoordinate
        Position to project.
    zoom : int
        Zoom level, within ``[config.min_zoom, config.max_zoom]``.
    config : GridConfig, optional
        Layout providing the zoom range. If None, built from settings.

    Returns
    -------
    TileCoordinate
        Fractional (x, y); ``y`` diverges as the latitude approaches +/-90.
    """
    config = config if config is not None else GridConfig.from_settings()
    n = 2.0 ** check_zoom(zoom, config)
    lat_rad = np.radians(coord.latitude)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        x = n * (coord.longitude + 180.0) / 360.0
        y = n * (1.0 - np.log(np.tan(lat_rad) + 1.0 / np.cos(lat_rad)) / np.pi) / 2.0
    return TileCoordinate(float(x), float(y))


def to_geo_coordinate(tile: TileCoordinate, zoom: int, config: GridConfig = None) -> GeoCoordinate:
    """Inverse of :func:`to_tile_space`.

    Parameters
    ----------
    tile : TileCoordinate
        Fractional tile position. Values outside ``[0, 2**zoom)`` are
        accepted and give longitudes outside [-180, 180].
    zoom : int
        Zoom level, within ``[config.min_zoom, config.max_zoom]``.
    config : GridConfig, optional
        Layout providing the zoom range. If None, built from settings.

    Returns
    -------
    GeoCoordinate
        Position in degrees.
    """
    config = config if config is not None else GridConfig.from_settings()
    n = 2.0 ** check_zoom(zoom, config)
    with np.errstate(over="ignore"):
        longitude = tile.x / n * 360.0 - 180.0
        lat_rad = np.arctan(np.sinh(np.pi * (1.0 - 2.0 * tile.y / n)))
    return GeoCoordinate(float(np.degrees(lat_rad)), float(longitude))


def to_web_mercator(coord: GeoCoordinate) -> Tuple[float, float]:
    """Transform a position to Web Mercator (EPSG:3857) meters.

    Parameters
    ----------
    coord : GeoCoordinate
        Position in degrees.

    Returns
    -------
    tuple of float
        (x, y) in meters.
    """
    x, y = _transformer_to_webmerc.transform(coord.longitude, coord.latitude)
    return float(x), float(y)


def resolution_m(zoom: int, latitude: float = 0.0, tile_size: int = 256) -> float:
    """Ground resolution in meters per pixel.

    Parameters
    ----------
    zoom : int
        Web Mercator zoom level (slippy-map convention).
    latitude : float, optional
        Latitude in degrees the resolution applies to, by default the
        equator.
    tile_size : int, optional
        Tile edge in pixels, by default 256.

    Returns
    -------
    float
        Meters covered by one pixel.
    """
    equator = (2 * math.pi * WEBMERCATOR_RADIUS) / (tile_size * 2**zoom)
    return equator * math.cos(math.radians(latitude))
