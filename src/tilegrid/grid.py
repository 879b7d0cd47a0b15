"""Build the square grid of tiles to fetch around a geographic centre.

The integer tiles to request and the sub-pixel alignment are decoupled:
the grid is anchored on the tile containing the centre, and a pixel
offset shifts the whole grid so the exact centre lands in the middle of
the visible viewport.
"""
import logging
import math

from .config import GridConfig
from .projection import check_zoom, to_tile_space
from .types import (GeoCoordinate, GridCell, InvalidArgumentError, PixelOffset,
                    TileGrid, TileIndex)

logger = logging.getLogger(__name__)


def build_grid(center: GeoCoordinate, zoom: int, grid_dimension: int = None,
               config: GridConfig = None) -> TileGrid:
    """Select the tiles around ``center`` and the offset that centres them.

    Parameters
    ----------
    center : GeoCoordinate
        Position to show at the centre of the viewport.
    zoom : int
        Zoom level of the requested tiles.
    grid_dimension : int, optional
        Tiles along each edge of the grid. Odd values give a symmetric
        grid; for even values the anchor tile sits at column and row
        ``grid_dimension // 2``, so the extra tile falls on the west and
        north side. If None, uses ``config.fetch_grid_dimension``.
    config : GridConfig, optional
        Tile layout. If None, built from settings.

    Returns
    -------
    TileGrid
        ``grid_dimension ** 2`` cells in row-major order and the pixel
        offset to apply to the grid's top-left corner.

    Raises
    ------
    InvalidArgumentError
        If ``zoom`` is out of range or ``grid_dimension`` is not a
        positive integer, or if the centre is so close to a pole
        that its tile y is not finite.
    """
    config = config if config is not None else GridConfig.from_settings()
    if grid_dimension is None:
        grid_dimension = config.fetch_grid_dimension
    if isinstance(grid_dimension, bool) or not isinstance(grid_dimension, int) \
            or grid_dimension < 1:
        raise InvalidArgumentError(
            f"grid_dimension must be a positive integer, got {grid_dimension!r}")
    check_zoom(zoom, config)

    precise = to_tile_space(center, zoom, config)
    if not (math.isfinite(precise.x) and math.isfinite(precise.y)):
        raise InvalidArgumentError(
            f"Latitude {center.latitude} projects outside tile space at zoom {zoom}")
    anchor = precise.floor(zoom)
    half = grid_dimension // 2
    start_x = anchor.x - half
    start_y = anchor.y - half
    logger.debug("Centre tile %s (precise %s), grid starts at (%d, %d)",
                 anchor, precise, start_x, start_y)

    world = 2 ** zoom
    cells = []
    for row in range(grid_dimension):
        for column in range(grid_dimension):
            tile_x = start_x + column
            if config.wrap_tiles:
                tile_x %= world
            tile = TileIndex(tile_x, start_y + row, zoom)
            cells.append(GridCell(tile, column, row))

    # Where the centre sits in the fetched grid versus where it should be.
    target_x = (precise.x - start_x) * config.tile_size
    target_y = (precise.y - start_y) * config.tile_size
    offset = PixelOffset(config.viewport_center - target_x,
                         config.viewport_center - target_y)
    logger.debug("Generated %d tiles with offset %s", len(cells), offset)
    return TileGrid(tuple(cells), offset, zoom, grid_dimension, config.wrap_tiles)


def tile_shift(before: TileGrid, after: TileGrid):
    """Number of whole tiles ``after`` is shifted relative to ``before``.

    Both grids must share zoom, dimension and wrapping. Wrapped x indices
    are compared modulo the world width, unwrapped ones directly.
    """
    if (before.zoom, before.dimension, before.wrapped) != \
            (after.zoom, after.dimension, after.wrapped):
        raise InvalidArgumentError("Grids differ in zoom, dimension or wrapping")
    first, second = before.cells[0].tile, after.cells[0].tile
    dx = second.x - first.x
    if before.wrapped:
        world = 2 ** before.zoom
        dx = (dx + world // 2) % world - world // 2
    return dx, second.y - first.y
