"""Configuration management for tilegrid.

Settings are loaded with Dynaconf from multiple locations in order of
increasing priority:

1. Global settings (/etc/tilegrid/)
2. User settings (~/.config/tilegrid/)
3. Current directory settings (./)
4. Environment variable specified file (TILEGRID_SETTINGS_FILE_FOR_DYNACONF)

Individual values can also be overridden with ``TILEGRID_`` prefixed
environment variables, e.g. ``TILEGRID_TILE_SIZE=512``.

The grid layout itself is passed around as an explicit :class:`GridConfig`
value; ``settings`` is only consulted when a caller does not supply one.

Attributes
----------
USER_DIR : pathlib.Path
    Path to user configuration directory.
GLOB_DIR : pathlib.Path
    Path to global configuration directory.
CURR_DIR : pathlib.Path
    Path to current working directory.
settings : Dynaconf
    The Dynaconf settings object with loaded configuration.
"""
import os
import pathlib
from dataclasses import dataclass

from dynaconf import Dynaconf

from .types import InvalidArgumentError, require_finite

# Deepest zoom any tile scheme uses; keeps 2**zoom well inside float range.
MAX_SUPPORTED_ZOOM = 30

USER_DIR = pathlib.Path("~/.config/tilegrid").expanduser()
GLOB_DIR = pathlib.Path("/etc/tilegrid/")
CURR_DIR = pathlib.Path("./").absolute()
settings_files = [
    GLOB_DIR / "settings.toml",
    USER_DIR / "settings.toml",
    CURR_DIR / "settings.toml",
    ]
extra_file = os.getenv("TILEGRID_SETTINGS_FILE_FOR_DYNACONF")
if extra_file:
    settings_files.append(pathlib.Path(extra_file).absolute())

settings = Dynaconf(
    merge_enabled = True,
    envvar_prefix="TILEGRID",
    settings_files=settings_files,
    environments=True,
    load_dotenv=True,
)

def change_env(new_env):
    """Change the active Dynaconf environment.

    Parameters
    ----------
    new_env : str
        The environment name to switch to (e.g., 'development', 'production').
    """
    settings.setenv(new_env)
    settings.reload()


@dataclass(frozen=True)
class GridConfig:
    """Tile layout shared by the grid builder, the pan resolver and the viewport.

    Parameters
    ----------
    tile_size : int, optional
        Edge length of one square tile in pixels, by default 256.
    visible_grid_dimension : int, optional
        Odd number of tiles shown along each edge of the viewport,
        by default 3.
    fetch_grid_dimension : int, optional
        Odd number of tiles fetched along each edge; the extra ring is the
        buffer that can be panned into before refetching, by default 5.
    positioning_factor : float, optional
        Multiplier on the tile-to-tile pixel stride. 1 lays tiles out
        edge-to-edge, by default 1.
    min_zoom, max_zoom : int, optional
        Accepted zoom range, by default 1 and 22.
    wrap_tiles : bool, optional
        Reduce grid tile x indices modulo ``2**zoom`` so columns past the
        antimeridian address real tiles, by default True.

    Raises
    ------
    InvalidArgumentError
        If the combination of values can not describe a grid layout.
    """

    tile_size: int = 256
    visible_grid_dimension: int = 3
    fetch_grid_dimension: int = 5
    positioning_factor: float = 1
    min_zoom: int = 1
    max_zoom: int = 22
    wrap_tiles: bool = True

    def __post_init__(self):
        for name in ("tile_size", "visible_grid_dimension", "fetch_grid_dimension",
                     "min_zoom", "max_zoom"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
        require_finite("positioning_factor", self.positioning_factor)
        if self.tile_size <= 0:
            raise InvalidArgumentError(f"tile_size must be positive, got {self.tile_size}")
        for name in ("visible_grid_dimension", "fetch_grid_dimension"):
            value = getattr(self, name)
            if value <= 0 or value % 2 == 0:
                raise InvalidArgumentError(f"{name} must be a positive odd number, got {value}")
        if self.fetch_grid_dimension < self.visible_grid_dimension:
            raise InvalidArgumentError(
                f"fetch_grid_dimension ({self.fetch_grid_dimension}) is smaller than "
                f"visible_grid_dimension ({self.visible_grid_dimension})")
        if self.positioning_factor <= 0:
            raise InvalidArgumentError(
                f"positioning_factor must be positive, got {self.positioning_factor}")
        if not 0 <= self.min_zoom <= self.max_zoom <= MAX_SUPPORTED_ZOOM:
            raise InvalidArgumentError(
                f"Invalid zoom range [{self.min_zoom}, {self.max_zoom}], "
                f"levels must lie in [0, {MAX_SUPPORTED_ZOOM}]")

    @classmethod
    def from_settings(cls, source=None):
        """Build a GridConfig from Dynaconf settings.

        Parameters
        ----------
        source : Dynaconf, optional
            Settings object to read. If None, uses the module ``settings``.

        Returns
        -------
        GridConfig
            Layout with every missing key falling back to its default.
        """
        source = source if source is not None else settings
        try:
            return cls(
                tile_size=int(source.get("tile_size", cls.tile_size)),
                visible_grid_dimension=int(source.get("visible_grid_dimension",
                                                      cls.visible_grid_dimension)),
                fetch_grid_dimension=int(source.get("fetch_grid_dimension",
                                                    cls.fetch_grid_dimension)),
                positioning_factor=float(source.get("positioning_factor",
                                                    cls.positioning_factor)),
                min_zoom=int(source.get("min_zoom", cls.min_zoom)),
                max_zoom=int(source.get("max_zoom", cls.max_zoom)),
                wrap_tiles=bool(source.get("wrap_tiles", cls.wrap_tiles)),
            )
        except InvalidArgumentError:
            raise
        except (TypeError, ValueError) as err:
            raise InvalidArgumentError(f"Invalid tile grid settings: {err}") from err

    @property
    def step(self) -> float:
        """Pixel distance between the origins of neighbouring tiles."""
        return self.tile_size * self.positioning_factor

    @property
    def viewport_extent(self) -> float:
        return (self.visible_grid_dimension - 1) * self.step + self.tile_size

    @property
    def viewport_center(self) -> float:
        return self.viewport_extent / 2

    @property
    def fetch_extent(self) -> float:
        return (self.fetch_grid_dimension - 1) * self.step + self.tile_size
