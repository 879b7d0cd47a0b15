"""Shared pytest fixtures for tilegrid tests."""

import pytest

from tilegrid import GeoCoordinate, GridConfig, TileCoordinate, to_geo_coordinate


@pytest.fixture
def grid_config():
    """Provide the default 3x3 visible / 5x5 fetched layout with 256 px tiles."""
    return GridConfig(tile_size=256, visible_grid_dimension=3, fetch_grid_dimension=5,
                      positioning_factor=1, min_zoom=1, max_zoom=22)


@pytest.fixture
def eiffel_tower():
    """Provide the default map centre."""
    return GeoCoordinate(48.8584, 2.2945)


@pytest.fixture
def null_island():
    """Provide (0, 0), which projects exactly onto a tile corner at every zoom."""
    return GeoCoordinate(0.0, 0.0)


@pytest.fixture
def tile_center(grid_config):
    """Provide the centre of tile (8, 8) at zoom 4."""
    return to_geo_coordinate(TileCoordinate(8.5, 8.5), 4, grid_config)


@pytest.fixture
def sample_coordinates():
    """Provide coordinates spread over the valid Web Mercator range."""
    lats = [-85.0, -60.5, -33.8688, -0.0001, 0.0, 12.34, 48.8584, 71.2, 85.0]
    lons = [-180.0, -122.4194, -45.0, 0.0, 2.2945, 90.5, 151.2093, 179.9999]
    return [GeoCoordinate(lat, lon) for lat in lats for lon in lons]
