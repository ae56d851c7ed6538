"""Tests for strip moves on the schedule projection."""

import pytest

from smartset.models import Scene, Strip, Stripboard
from smartset.scheduling import Direction, group_strips, move_strip
from smartset.scheduling.moves import EMPTY_BUCKET_ORDER, renormalize_bucket


def _view(placements, shooting_days=()):
    """Build a view from ``(shoot_day, order)`` pairs, one scene per pair."""
    scenes = [
        Scene(project_id="p", scene_number=str(i + 1), shoot_day=day)
        for i, (day, _) in enumerate(placements)
    ]
    board = Stripboard(
        project_id="p",
        strips=[
            Strip(scene_id=scene.id, order=order)
            for scene, (_, order) in zip(scenes, placements, strict=True)
        ],
        shooting_days=list(shooting_days),
    )
    return board, group_strips(board, scenes)


class TestSameBucketMoves:
    """Test moves inside one bucket."""

    def test_move_up_swaps_with_previous(self):
        """Moving the middle strip up swaps orders with the one above."""
        board, view = _view([(None, 0), (None, 1), (None, 2)])
        strips = list(board.strips)

        result = move_strip(view, strips[1].id, Direction.UP)

        assert result.moved
        assert not result.crossed_bucket
        assert [s.order for s in strips] == [1, 0, 2]
        assert [s.id for s in view.unscheduled.strips] == [
            strips[1].id,
            strips[0].id,
            strips[2].id,
        ]
        assert all(view.scene_for(s).shoot_day is None for s in strips)

    def test_up_then_down_restores_order(self):
        """A move and its inverse leave the bucket unchanged."""
        board, view = _view([("2024-01-01", o) for o in (3, 7, 8, 12)])
        before = [(s.id, s.order) for s in board.strips]
        middle = view.buckets[1].strips[2].id

        move_strip(view, middle, Direction.UP)
        move_strip(view, middle, Direction.DOWN)

        assert [(s.id, s.order) for s in board.strips] == before

    def test_ties_renormalized_before_swap(self):
        """Equal orders are spread out so the swap changes the sequence."""
        board, view = _view([(None, 0), (None, 0), (None, 0)])
        bucket = view.unscheduled
        second = bucket.strips[1]

        move_strip(view, second.id, Direction.UP)

        assert bucket.strips[0] is second
        assert bucket.orders() == [0, 1, 2]


class TestCrossBucketMoves:
    """Test moves that change the shooting day."""

    def test_bottom_of_last_bucket_is_noop(self):
        """Moving down past the last bucket does nothing."""
        board, view = _view([(None, 0), (None, 1)])
        bottom = view.unscheduled.strips[-1]

        result = move_strip(view, bottom.id, Direction.DOWN)

        assert not result.moved
        assert bottom.order == 1
        assert view.scene_for(bottom).shoot_day is None

    def test_top_of_unscheduled_is_noop(self):
        """Moving up from the first position does nothing."""
        board, view = _view([(None, 0), ("2024-01-01", 0)])
        result = move_strip(view, view.unscheduled.strips[0].id, Direction.UP)
        assert not result.moved

    def test_move_down_into_next_day(self):
        """The strip goes before the next day's first strip."""
        board, view = _view(
            [
                ("2024-01-01", 1),
                ("2024-01-01", 2),
                ("2024-01-02", 5),
                ("2024-01-02", 6),
            ]
        )
        moving = view.buckets[1].strips[-1]

        result = move_strip(view, moving.id, Direction.DOWN)

        assert result.moved
        assert result.from_day == "2024-01-01"
        assert result.to_day == "2024-01-02"
        assert result.scene.shoot_day == "2024-01-02"
        assert moving.order == 4
        assert view.buckets[2].strips[0] is moving
        assert view.scene_for(moving).shoot_day == "2024-01-02"

    def test_move_up_into_previous_day(self):
        """The strip goes after the previous day's last strip."""
        board, view = _view(
            [("2024-01-01", 3), ("2024-01-01", 8), ("2024-01-02", 0)]
        )
        moving = view.buckets[2].strips[0]

        result = move_strip(view, moving.id, Direction.UP)

        assert result.to_day == "2024-01-01"
        assert moving.order == 9
        assert view.buckets[1].strips[-1] is moving

    def test_move_up_into_unscheduled(self):
        """Moving above the first day unschedules the scene."""
        board, view = _view([(None, 0), ("2024-01-01", 0)])
        moving = view.buckets[1].strips[0]

        result = move_strip(view, moving.id, Direction.UP)

        assert result.to_day is None
        assert result.scene.shoot_day is None
        assert moving.order == 1

    def test_move_into_empty_day(self):
        """An empty destination bucket gives the strip order zero."""
        board, view = _view([(None, 4)], shooting_days=["2024-01-01"])
        moving = view.unscheduled.strips[0]

        result = move_strip(view, moving.id, Direction.DOWN)

        assert result.to_day == "2024-01-01"
        assert moving.order == EMPTY_BUCKET_ORDER

    @pytest.mark.parametrize("direction", [Direction.UP, Direction.DOWN])
    def test_buckets_stay_strictly_ordered(self, direction):
        """After any sequence of moves no bucket has ties or disorder."""
        board, view = _view(
            [
                (None, 0),
                (None, 1),
                ("2024-01-01", 0),
                ("2024-01-01", 1),
                ("2024-01-02", 0),
            ]
        )
        for strip in list(board.strips) * 3:
            move_strip(view, strip.id, direction)
            for bucket in view.buckets:
                orders = bucket.orders()
                assert orders == sorted(orders)
                assert len(set(orders)) == len(orders)

    def test_hidden_strip_returns_none(self):
        """Strips outside the view cannot be moved."""
        board, view = _view([(None, 0)])
        assert move_strip(view, "unknown", Direction.UP) is None


def test_renormalize_bucket_reports_changes():
    """Renormalizing rewrites orders to 0..n-1."""
    board, view = _view([(None, 2), (None, 5)])
    assert renormalize_bucket(view.unscheduled)
    assert view.unscheduled.orders() == [0, 1]
    assert not renormalize_bucket(view.unscheduled)
