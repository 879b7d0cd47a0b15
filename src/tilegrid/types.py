"""Value objects shared by the projection, grid and pan modules.

Every value is immutable; operations return new instances instead of
mutating existing ones.
"""
import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

import mercantile


class InvalidArgumentError(ValueError):
    """Raised when a caller violates a precondition (bad zoom, NaN input...)."""


def require_finite(name, value):
    """Raise InvalidArgumentError unless ``value`` is a finite number."""
    try:
        finite = math.isfinite(value)
    except TypeError:
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}") from None
    if not finite:
        raise InvalidArgumentError(f"{name} must be finite, got {value!r}")


@dataclass(frozen=True)
class GeoCoordinate:
    """WGS84 position in degrees.

    Parameters
    ----------
    latitude : float
        Latitude in degrees, normally within the Web Mercator range
        (about +/-85.05).
    longitude : float
        Longitude in degrees. Values outside [-180, 180] are kept as is.

    Raises
    ------
    InvalidArgumentError
        If either value is not a finite number.
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        require_finite("latitude", self.latitude)
        require_finite("longitude", self.longitude)

    def normalized(self) -> "GeoCoordinate":
        """Return a copy with the longitude wrapped into [-180, 180)."""
        longitude = (self.longitude + 180.0) % 360.0 - 180.0
        return GeoCoordinate(self.latitude, longitude)


class TileIndex(NamedTuple):
    """Integer tile address at a zoom level."""

    x: int
    y: int
    zoom: int

    @property
    def key(self) -> str:
        return f"{self.zoom}-{self.x}-{self.y}"

    @property
    def quadkey(self) -> str:
        return mercantile.quadkey(self.x, self.y, self.zoom)

    def bounds(self) -> mercantile.LngLatBbox:
        """Geographic bounds (west, south, east, north) of the tile."""
        return mercantile.bounds(self.x, self.y, self.zoom)


class TileCoordinate(NamedTuple):
    """Fractional position in tile space.

    Near the poles ``y`` can be infinite or NaN; such values are carried
    through untouched.
    """

    x: float
    y: float

    def floor(self, zoom: int) -> TileIndex:
        """Return the integer tile whose [x, x+1) x [y, y+1) cell holds this point.

        Raises
        ------
        InvalidArgumentError
            If either axis is not finite, e.g. after projecting a pole.
        """
        require_finite("tile x", self.x)
        require_finite("tile y", self.y)
        return TileIndex(math.floor(self.x), math.floor(self.y), zoom)


class PixelOffset(NamedTuple):
    x: float
    y: float


class GridCell(NamedTuple):
    """One tile of a fetched grid and its (column, row) slot in that grid."""

    tile: TileIndex
    column: int
    row: int

    def pixel_origin(self, config) -> PixelOffset:
        """Top-left pixel of this cell inside the fetched grid."""
        return PixelOffset(self.column * config.step, self.row * config.step)


class TileGrid(NamedTuple):
    """Result of :func:`tilegrid.grid.build_grid`.

    Attributes
    ----------
    cells : tuple of GridCell
        ``dimension ** 2`` cells in row-major order.
    offset : PixelOffset
        Translation of the grid's top-left corner that puts the requested
        centre at the centre of the viewport.
    zoom : int
        Zoom level of every tile in the grid.
    dimension : int
        Number of tiles along each edge.
    wrapped : bool
        Whether tile x indices were reduced modulo ``2**zoom``.
    """

    cells: Tuple[GridCell, ...]
    offset: PixelOffset
    zoom: int
    dimension: int
    wrapped: bool = False

    def center_cell(self) -> GridCell:
        """Return the cell at column and row ``dimension // 2``."""
        half = self.dimension // 2
        return self.cells[half * self.dimension + half]

    def covers_viewport(self, config, dx: float = 0.0, dy: float = 0.0) -> bool:
        """Check whether the grid still fills the viewport after a drag.

        Parameters
        ----------
        config : GridConfig
            Layout the grid was built with.
        dx, dy : float
            Pixel drag applied on top of ``offset``.

        Returns
        -------
        bool
            False once any part of the viewport would show empty space,
            i.e. a new grid has to be fetched.
        """
        extent = (self.dimension - 1) * config.step + config.tile_size
        left = self.offset.x + dx
        top = self.offset.y + dy
        view = config.viewport_extent
        return left <= 0 and top <= 0 and left + extent >= view and top + extent >= view
