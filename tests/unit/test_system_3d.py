"""
Unit tests for the 3D system view.
"""

import math

import pytest

from charts.system_3d import (
    BASE_DISTANCE,
    CONNECTIONS,
    MAX_ZOOM,
    MIN_ZOOM,
    ViewState,
    camera_eye,
    system_components,
    system_figure,
)


class TestComponents:
    """Test component placement and shading."""

    def test_components_sorted_by_depth(self, flow):
        components = system_components(flow)
        assert len(components) == 5
        assert [c.z for c in components] == sorted(c.z for c in components)
        assert components[-1].name == "Transformer"

    def test_generator_split(self, flow):
        by_name = {c.name: c for c in system_components(flow)}
        assert by_name["Generator 1"].value_kw == pytest.approx(60.0)
        assert by_name["Generator 2"].value_kw == pytest.approx(40.0)
        assert by_name["Load Center"].value_kw == pytest.approx(88.2)

    def test_opacity(self, flow):
        by_name = {c.name: c for c in system_components(flow)}
        assert by_name["Generator 1"].opacity == pytest.approx(0.3 + 0.7 * 60.0 / 500.0)

    def test_connections_reference_components(self, flow):
        names = {c.name for c in system_components(flow)}
        for src, dst in CONNECTIONS:
            assert src in names and dst in names


class TestViewState:
    """Test rotate / zoom / reset controls."""

    def test_rotate(self):
        view = ViewState()
        view.rotate(dx=50, dy=-20)
        assert view.rotation_y == pytest.approx(0.5)
        assert view.rotation_x == pytest.approx(-0.2)

    def test_zoom_clamped(self):
        view = ViewState()
        for _ in range(20):
            view.zoom_in()
        assert view.zoom == MAX_ZOOM
        for _ in range(20):
            view.zoom_out()
        assert view.zoom == MIN_ZOOM

    def test_zoom_step(self):
        view = ViewState()
        view.zoom_in()
        assert view.zoom == 1.2

    def test_reset(self):
        view = ViewState(rotation_x=1.0, rotation_y=2.0, zoom=2.0)
        view.reset()
        assert view == ViewState()

    def test_revision_changes(self):
        view = ViewState()
        before = view.revision()
        view.rotate(10, 0)
        assert view.revision() != before


class TestCamera:
    """Test camera placement."""

    def test_distance_follows_zoom(self):
        for zoom in (0.5, 1.0, 2.0):
            eye = camera_eye(ViewState(zoom=zoom))
            distance = math.sqrt(eye["x"] ** 2 + eye["y"] ** 2 + eye["z"] ** 2)
            assert distance == pytest.approx(BASE_DISTANCE / zoom)

    def test_elevation_kept_off_pole(self):
        eye = camera_eye(ViewState(rotation_x=10.0))
        assert math.hypot(eye["x"], eye["y"]) > 0

    def test_default_view_from_front(self):
        eye = camera_eye(ViewState())
        assert eye["x"] == pytest.approx(0.0, abs=1e-9)
        assert eye["y"] < 0
        assert eye["z"] > 0


class TestSystemFigure:
    """Test the assembled 3D figure."""

    def test_traces(self, flow):
        fig = system_figure(flow, ViewState())
        # grid, 4 connections, 5 components
        assert len(fig.data) == 10
        assert fig.data[-1].name == "Transformer"

    def test_camera_and_revision(self, flow):
        view = ViewState(zoom=2.0)
        fig = system_figure(flow, view)
        assert fig.layout.uirevision == view.revision()
        assert fig.layout.scene.camera.eye.z == pytest.approx(camera_eye(view)["z"])
