"""
Dispatch ordering tests - per-driver sequence and driver boards.
"""

from cargo_dispatch.data.models import CargoStatus
from cargo_dispatch.services.ordering import (
    driver_last_location,
    move_item,
    partition_driver_cargos,
    reorder_active_cargos,
    resequence,
    sort_by_order,
)

from .conftest import make_cargo, make_driver

DISPATCHED = CargoStatus.DISPATCHED
PICKED_UP = CargoStatus.PICKED_UP


def _active_fleet():
    return [
        make_cargo("a", status=DISPATCHED, order=1),
        make_cargo("b", status=PICKED_UP, order=2),
        make_cargo("c", status=DISPATCHED, order=3),
        make_cargo("d", status=DISPATCHED, order=4),
        make_cargo("booked", status=CargoStatus.BOOKED, order=5),
        make_cargo("other", status=DISPATCHED, order=1, driver_id="d2"),
    ]


class TestMoveItem:

    def test_move_down(self):
        assert move_item(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]

    def test_move_up(self):
        assert move_item(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]

    def test_source_not_modified(self):
        items = ["a", "b"]
        move_item(items, 0, 1)
        assert items == ["a", "b"]


class TestResequence:

    def test_contiguous_from_one(self):
        cargos = [make_cargo("x", order=7), make_cargo("y", order=0), make_cargo("z", order=7)]
        assert [c.order for c in resequence(cargos)] == [1, 2, 3]

    def test_sort_by_order_is_stable(self):
        cargos = [make_cargo("x", order=0), make_cargo("y", order=0), make_cargo("z", order=-1)]
        assert [c.id for c in sort_by_order(cargos)] == ["z", "x", "y"]


class TestReorderActiveCargos:

    def test_drag_down(self):
        result = reorder_active_cargos(_active_fleet(), "d1", "a", "c")
        assert [(c.id, c.order) for c in result] == [("b", 1), ("c", 2), ("a", 3), ("d", 4)]

    def test_drag_up(self):
        result = reorder_active_cargos(_active_fleet(), "d1", "d", "b")
        assert [(c.id, c.order) for c in result] == [("a", 1), ("d", 2), ("b", 3), ("c", 4)]

    def test_renumbers_gapped_orders(self):
        cargos = [
            make_cargo("a", status=DISPATCHED, order=10),
            make_cargo("b", status=DISPATCHED, order=20),
            make_cargo("c", status=DISPATCHED, order=0),
        ]
        result = reorder_active_cargos(cargos, "d1", "c", "b")
        assert [(c.id, c.order) for c in result] == [("a", 1), ("b", 2), ("c", 3)]

    def test_dropping_on_itself_changes_nothing(self):
        assert reorder_active_cargos(_active_fleet(), "d1", "b", "b") == []

    def test_inactive_or_foreign_cargo_changes_nothing(self):
        assert reorder_active_cargos(_active_fleet(), "d1", "booked", "a") == []
        assert reorder_active_cargos(_active_fleet(), "d1", "a", "other") == []


class TestDriverBoard:

    def test_partition(self):
        cargos = _active_fleet() + [
            make_cargo("paid", status=CargoStatus.PAID, order=2),
            make_cargo("tonu", status=CargoStatus.TONU, order=1),
        ]
        board = partition_driver_cargos(cargos, "d1")
        assert [c.id for c in board.active] == ["a", "b", "c", "d"]
        assert [c.id for c in board.booked] == ["booked"]
        assert [c.id for c in board.history] == ["tonu", "paid"]


class TestDriverLastLocation:

    def test_last_in_progress_delivery(self):
        cargos = [
            make_cargo("a", status=DISPATCHED, order=1, delivery_location="Dallas, TX"),
            make_cargo("b", status=CargoStatus.BOOKED, order=2, delivery_location="Houston, TX"),
            make_cargo("c", status=CargoStatus.DELIVERED, order=3, delivery_location="Austin, TX"),
        ]
        assert driver_last_location("d1", cargos, make_driver("d1")) == "Houston, TX"

    def test_falls_back_to_home_city(self):
        cargos = [make_cargo("c", status=CargoStatus.PAID)]
        assert driver_last_location("d1", cargos, make_driver("d1", home_city="Denver")) == "Denver"

    def test_unknown_driver(self):
        assert driver_last_location("ghost", [], None) == ""
