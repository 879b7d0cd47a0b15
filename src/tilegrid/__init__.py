"""Tile-grid geocoding and viewport positioning for slippy map viewers.

The package converts between geographic and tile coordinates, selects
the grid of tiles to fetch around a centre and the pixel offset that
centres it in the viewport, and turns drags back into map centres.
"""

from . import config
from .config import GridConfig
from .grid import build_grid, tile_shift
from .pan import resolve_pan
from .projection import resolution_m, to_geo_coordinate, to_tile_space, to_web_mercator
from .types import (GeoCoordinate, GridCell, InvalidArgumentError, PixelOffset,
                    TileCoordinate, TileGrid, TileIndex)
from .viewport import DEFAULT_LOCATION, MapView, PanGesture, step_zoom

__version__ = "0.1.0"
