"""Command-line interface for tilegrid.

Inspect which tiles a map viewer would fetch around a location and where
a drag would move the centre, using the Typer framework.
"""
import logging

import typer

from . import config
from .grid import build_grid
from .pan import resolve_pan
from .projection import to_tile_space, to_web_mercator
from .types import GeoCoordinate, InvalidArgumentError
from .viewport import DEFAULT_LOCATION

app = typer.Typer()

LAT_OPTION = typer.Option(DEFAULT_LOCATION.center.latitude, "--lat", help="Latitude in degrees.")
LNG_OPTION = typer.Option(DEFAULT_LOCATION.center.longitude, "--lng", help="Longitude in degrees.")
ZOOM_OPTION = typer.Option(DEFAULT_LOCATION.zoom, "--zoom", "-z", help="Zoom level.")


@app.callback()
def callback(
    env: str = typer.Option("DEFAULT", help="Settings environment to use."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
):
    """
    Tile grid geocoding for slippy map viewers.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    if env != "DEFAULT":
        config.change_env(env)


def _fail(err):
    typer.echo(f"Error: {err}", err=True)
    raise typer.Exit(code=1)


@app.command()
def tile(lat: float = LAT_OPTION, lng: float = LNG_OPTION, zoom: int = ZOOM_OPTION):
    """
    Show the tile-space position of a location.
    """
    try:
        center = GeoCoordinate(lat, lng)
        precise = to_tile_space(center, zoom, config.GridConfig.from_settings())
        anchor = precise.floor(zoom)
    except InvalidArgumentError as err:
        _fail(err)
    x_m, y_m = to_web_mercator(center)
    typer.echo(f"precise: {precise.x:.6f} {precise.y:.6f}")
    typer.echo(f"tile: {anchor.zoom}/{anchor.x}/{anchor.y}")
    typer.echo(f"meters: {x_m:.2f} {y_m:.2f}")


@app.command()
def grid(lat: float = LAT_OPTION, lng: float = LNG_OPTION, zoom: int = ZOOM_OPTION,
         dimension: int = typer.Option(None, "--dimension", "-n",
                                       help="Tiles per grid edge (defaults to the fetch grid).")):
    """
    List the tiles to fetch around a location and the grid offset.
    """
    try:
        result = build_grid(GeoCoordinate(lat, lng), zoom, dimension,
                            config.GridConfig.from_settings())
    except InvalidArgumentError as err:
        _fail(err)
    for cell in result.cells:
        typer.echo(f"{cell.row} {cell.column} {cell.tile.zoom}/{cell.tile.x}/{cell.tile.y}")
    typer.echo(f"offset: {result.offset.x:.2f} {result.offset.y:.2f}")


@app.command()
def pan(lat: float = LAT_OPTION, lng: float = LNG_OPTION, zoom: int = ZOOM_OPTION,
        dx: float = typer.Option(0.0, "--dx", help="Horizontal drag in pixels."),
        dy: float = typer.Option(0.0, "--dy", help="Vertical drag in pixels.")):
    """
    Show the centre reached by dragging the map content.
    """
    try:
        center = resolve_pan(GeoCoordinate(lat, lng), zoom, dx, dy,
                             config.GridConfig.from_settings())
    except InvalidArgumentError as err:
        _fail(err)
    typer.echo(f"{center.latitude:.6f} {center.longitude:.6f}")


if __name__ == "__main__":
    app()
