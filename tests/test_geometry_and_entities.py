"""
Tests for rectangle overlap, avatar physics and obstacle geometry.
"""

import pytest

from flappy_game.flappy_core.config_loader import load_config
from flappy_game.flappy_core.geometry import Rect, intersects
from flappy_game.flappy_core.avatar import Avatar
from flappy_game.flappy_core.obstacle import Obstacle


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def avatar(config):
    return Avatar(config.avatar, x=50.0, y=300.0)


@pytest.fixture
def obstacle(config):
    # Top segment 0..200, gap 200..350, bottom 350..600
    return Obstacle(config.obstacle, x=100.0, top_height=200.0, canvas_height=600)


class TestIntersects:
    """Test axis-aligned overlap."""

    def test_overlapping(self):
        assert intersects(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))

    def test_contained(self):
        assert intersects(Rect(0, 0, 100, 100), Rect(40, 40, 5, 5))

    def test_separate(self):
        assert not intersects(Rect(0, 0, 10, 10), Rect(20, 20, 5, 5))

    def test_touching_edges_do_not_count(self):
        """Shared edges are not a collision."""
        assert not intersects(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10))
        assert not intersects(Rect(0, 0, 10, 10), Rect(0, 10, 10, 10))
        assert not intersects(Rect(0, 0, 10, 10), Rect(10, 10, 5, 5))

    def test_overlap_on_one_axis_only(self):
        assert not intersects(Rect(0, 0, 10, 10), Rect(5, 20, 10, 10))

    def test_symmetric(self):
        """intersects(a, b) == intersects(b, a)."""
        rects = [
            Rect(0, 0, 10, 10),
            Rect(5, 5, 10, 10),
            Rect(10, 0, 10, 10),
            Rect(-5, -5, 3, 30),
            Rect(2, 2, 1, 1),
            Rect(100, 100, 1, 1),
        ]
        for a in rects:
            for b in rects:
                assert intersects(a, b) == intersects(b, a)


class TestAvatar:
    """Test avatar physics."""

    def test_update_is_semi_implicit_euler(self, avatar, config):
        """Velocity changes first, then position uses the new velocity."""
        gravity = config.avatar.gravity
        for _ in range(20):
            v0, y0 = avatar.velocity, avatar.y
            avatar.update()
            assert avatar.velocity == pytest.approx(v0 + gravity)
            assert avatar.y == pytest.approx(y0 + avatar.velocity)

    def test_first_update_from_rest(self, avatar):
        avatar.update()
        assert avatar.velocity == 0.5
        assert avatar.y == 300.5

    def test_flap_sets_absolute_velocity(self, avatar, config):
        """Flap always lands on the flap constant."""
        for velocity in (-20.0, -8.0, 0.0, 3.5, 40.0):
            avatar.velocity = velocity
            avatar.flap()
            assert avatar.velocity == config.avatar.flap_strength

    def test_flap_twice_same_as_once(self, avatar):
        avatar.flap()
        once = avatar.velocity
        avatar.flap()
        assert avatar.velocity == once

    def test_no_bounds_enforced(self, avatar):
        """Avatar happily leaves the canvas; the game decides what that means."""
        for _ in range(500):
            avatar.update()
        assert avatar.y > 10_000

    def test_bounding_rect(self, avatar):
        rect = avatar.bounding_rect()
        assert rect == Rect(35.0, 285.0, 30.0, 30.0)

    def test_reset(self, avatar):
        avatar.velocity = 7.0
        avatar.reset(123.0)
        assert avatar.y == 123.0
        assert avatar.velocity == 0.0


class TestObstacle:
    """Test obstacle scrolling and collision rectangles."""

    def test_update_scrolls_left(self, obstacle, config):
        obstacle.update()
        assert obstacle.x == 100.0 - config.obstacle.speed

    def test_collision_rects(self, obstacle):
        top, bottom = obstacle.collision_rects()
        assert top == Rect(100.0, 0.0, 50.0, 200.0)
        assert bottom == Rect(100.0, 350.0, 50.0, 250.0)

    def test_bottom_segment_origin(self, obstacle, config):
        assert obstacle.bottom_y == obstacle.top_height + config.obstacle.gap

    def test_right_edge(self, obstacle):
        assert obstacle.right_edge == 150.0

    def test_avatar_in_gap_is_safe(self, obstacle, avatar):
        avatar.x = 125.0
        avatar.y = 275.0
        assert not obstacle.is_colliding(avatar)

    def test_avatar_hits_top_segment(self, obstacle, avatar):
        avatar.x = 125.0
        avatar.y = 210.0  # box top at 195, inside top segment
        assert obstacle.is_colliding(avatar)

    def test_avatar_hits_bottom_segment(self, obstacle, avatar):
        avatar.x = 125.0
        avatar.y = 340.0  # box bottom at 355
        assert obstacle.is_colliding(avatar)

    def test_avatar_touching_segment_edge_is_safe(self, obstacle, avatar):
        """Box edge exactly on the segment edge is not a hit."""
        avatar.x = 125.0
        avatar.y = 215.0  # box top exactly at 200
        assert not obstacle.is_colliding(avatar)

    def test_avatar_left_of_obstacle(self, obstacle, avatar):
        avatar.x = 85.0  # box right edge exactly at obstacle x
        avatar.y = 100.0
        assert not obstacle.is_colliding(avatar)

    def test_passed_starts_false(self, obstacle):
        assert obstacle.passed is False
