"""Tests for the tilegrid.viewport module."""

import pytest

from tilegrid.config import GridConfig
from tilegrid.types import GeoCoordinate, InvalidArgumentError
from tilegrid.viewport import (DEFAULT_LOCATION, Dragging, Idle, MapView, PanGesture,
                               step_zoom)


class TestPanGesture:
    """Tests for the drag state machine."""

    def test_starts_idle(self):
        gesture = PanGesture()
        assert gesture.state == Idle()
        assert not gesture.dragging
        assert gesture.delta == (0.0, 0.0)

    def test_press_starts_drag(self):
        gesture = PanGesture()
        gesture.press(100, 50)
        assert gesture.state == Dragging(100, 50, 0.0, 0.0)
        assert gesture.dragging

    def test_moves_accumulate_from_start(self):
        """Delta should always be measured from the press position."""
        gesture = PanGesture()
        gesture.press(100, 50)
        gesture.move(110, 40)
        gesture.move(160, 90)
        assert gesture.delta == (60, 40)

    def test_release_returns_delta_and_resets(self):
        gesture = PanGesture()
        gesture.press(0, 0)
        gesture.move(-30, 12)
        assert gesture.release() == (-30, 12)
        assert gesture.state == Idle()

    def test_release_only_once(self):
        """Mouse-up followed by pointer-leave should end the drag once."""
        gesture = PanGesture()
        gesture.press(0, 0)
        gesture.move(5, 5)
        assert gesture.release() == (5, 5)
        assert gesture.release() is None

    def test_move_while_idle_is_ignored(self):
        gesture = PanGesture()
        gesture.move(10, 10)
        assert gesture.state == Idle()

    def test_click_without_move(self):
        gesture = PanGesture()
        gesture.press(3, 4)
        assert gesture.release() == (0.0, 0.0)


class TestStepZoom:
    """Tests for the step_zoom function."""

    def test_steps_inside_range(self, grid_config):
        assert step_zoom(10, 1, grid_config) == 11
        assert step_zoom(10, -1, grid_config) == 9

    def test_clamps_at_max(self, grid_config):
        assert step_zoom(22, 1, grid_config) == 22

    def test_clamps_at_min(self, grid_config):
        assert step_zoom(1, -1, grid_config) == 1

    def test_large_steps(self, grid_config):
        assert step_zoom(5, 40, grid_config) == 22
        assert step_zoom(5, -40, grid_config) == 1


class TestMapView:
    """Tests for the MapView value."""

    def test_default_location(self):
        assert DEFAULT_LOCATION.center == GeoCoordinate(48.8584, 2.2945)
        assert DEFAULT_LOCATION.zoom == 17

    def test_grid_uses_fetch_dimension(self, eiffel_tower, grid_config):
        view = MapView(eiffel_tower, 17, grid_config)
        assert len(view.grid().cells) == 25

    def test_zero_pan_returns_same_view(self, eiffel_tower, grid_config):
        view = MapView(eiffel_tower, 17, grid_config)
        assert view.panned(0, 0) is view

    def test_pan_moves_centre(self, eiffel_tower, grid_config):
        view = MapView(eiffel_tower, 17, grid_config)
        moved = view.panned(256, 0)
        assert moved is not view
        assert moved.zoom == 17
        assert moved.center.longitude < eiffel_tower.longitude

    def test_pan_normalizes_longitude(self, grid_config):
        view = MapView(GeoCoordinate(0.0, 170.0), 3, grid_config)
        moved = view.panned(-512, 0)
        assert moved.center.longitude == pytest.approx(-100.0)

    def test_zoom_in_and_out(self, eiffel_tower, grid_config):
        view = MapView(eiffel_tower, 17, grid_config)
        assert view.zoomed(1).zoom == 18
        assert view.zoomed(-1).zoom == 16
        assert view.zoomed(1).center == eiffel_tower

    def test_zoom_at_bound_returns_same_view(self, eiffel_tower, grid_config):
        view = MapView(eiffel_tower, 22, grid_config)
        assert view.zoomed(1) is view

    def test_rejects_zoom_out_of_range(self, eiffel_tower):
        with pytest.raises(InvalidArgumentError):
            MapView(eiffel_tower, 12, GridConfig(max_zoom=10))

    def test_is_immutable(self, eiffel_tower, grid_config):
        view = MapView(eiffel_tower, 17, grid_config)
        with pytest.raises(AttributeError):
            view.zoom = 3
