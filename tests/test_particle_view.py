import math

import numpy as np
import pytest

pytest.importorskip("PyQt5.QtWidgets")

from ui.particle_view import project_points  # noqa: E402


def test_origin_projects_to_screen_center():
    screen = project_points(np.zeros((1, 3), dtype=np.float32), 0.0, 800, 600)

    np.testing.assert_allclose(screen, [[400.0, 300.0]])


def test_y_up_is_screen_up():
    screen = project_points(np.array([[0.0, 5.0, 0.0]]), 0.0, 800, 600)

    assert screen[0, 1] < 300.0


def test_nearer_points_spread_further():
    points = np.array([[5.0, 0.0, 0.0], [5.0, 0.0, 20.0]])

    far, near = project_points(points, 0.0, 800, 600)

    assert near[0] - 400 > far[0] - 400 > 0


def test_rotation_turns_around_y_axis():
    point = np.array([[10.0, 0.0, 0.0]])

    quarter = project_points(point, math.pi / 2, 800, 600)

    # x moves onto the depth axis and lands on the centre line
    np.testing.assert_allclose(quarter[:, 0], 400.0, atol=1e-6)


def test_points_behind_camera_are_dropped():
    points = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 45.0]])

    assert project_points(points, 0.0, 800, 600, camera_distance=40.0).shape == (1, 2)


def test_empty_buffer():
    assert project_points(np.zeros((0, 3)), 0.3, 800, 600).shape == (0, 2)


def test_screen_polygon_is_reused_and_parks_culled_points(qt_app):
    from ui.particle_view import OFFSCREEN, ParticleView

    view = ParticleView()
    points = np.array([[0.0, 0.0, 0.0], [5.0, 0.0, 0.0], [0.0, 0.0, 45.0]])
    view.set_frame(points, 0.0)

    screen = project_points(points, 0.0, 800, 600)
    polygon = view.screen_polygon(screen)

    assert polygon.size() == 3
    assert (polygon.at(0).x(), polygon.at(0).y()) == pytest.approx((400.0, 300.0))
    assert polygon.at(1).x() == pytest.approx(float(screen[1, 0]))
    assert polygon.at(2).x() == OFFSCREEN

    moved = screen + 10.0
    assert view.screen_polygon(moved) is polygon
    assert polygon.at(0).x() == pytest.approx(410.0)


def test_paint_renders_frame(qt_app):
    from ui.particle_view import ParticleView

    view = ParticleView()
    view.resize(320, 240)
    view.set_frame(np.random.default_rng(0).uniform(-10, 10, (500, 3)).astype(np.float32), 0.3)

    assert not view.grab().isNull()
