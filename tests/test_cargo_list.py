"""
Cargo list query tests - date, status and search filters.
"""

from datetime import date, datetime, timezone

from cargo_dispatch.data.models import CargoStatus
from cargo_dispatch.services.cargo_list import (
    CargoListFilter,
    dashboard_counts,
    driver_name,
    filter_cargos,
    unpaid_delivered_cargos,
)
from cargo_dispatch.services.drivers import search_drivers

from .conftest import make_cargo, make_driver

DRIVERS = [make_driver("d1", name="Jane Smith"), make_driver("d2", name="Mike Johnson")]


def _cargos():
    return [
        make_cargo("1", status=CargoStatus.PAID, notes="Fragile"),
        make_cargo("2", status=CargoStatus.BOOKED, driver_id="d2", pickup_location="Omaha, NE"),
        make_cargo(
            "3",
            status=CargoStatus.DISPATCHED,
            pickup_datetime=datetime(2024, 3, 2, 23, 0, tzinfo=timezone.utc),
        ),
        make_cargo("4", status=CargoStatus.DELIVERED, driver_id=""),
    ]


class TestFilterCargos:

    def test_selected_date_matches_pickup_day(self):
        result = filter_cargos(_cargos(), DRIVERS, CargoListFilter(selected_date=date(2024, 3, 2)))
        assert [c.id for c in result] == ["3"]

    def test_no_selected_date_lists_everything_by_status(self):
        result = filter_cargos(_cargos(), DRIVERS, CargoListFilter())
        assert [c.status for c in result] == [
            CargoStatus.BOOKED,
            CargoStatus.DISPATCHED,
            CargoStatus.DELIVERED,
            CargoStatus.PAID,
        ]

    def test_status_filter(self):
        result = filter_cargos(
            _cargos(), DRIVERS, CargoListFilter(selected_date=date(2024, 3, 1), status=CargoStatus.PAID)
        )
        assert [c.id for c in result] == ["1"]

    def test_disabled_filters_are_ignored(self):
        cargo_filter = CargoListFilter(
            selected_date=date(1999, 1, 1),
            status=CargoStatus.TONU,
            apply_date_filter=False,
            apply_status_filter=False,
        )
        assert len(filter_cargos(_cargos(), DRIVERS, cargo_filter)) == 4

    def test_search_is_case_insensitive_across_fields(self):
        def search(term):
            return [c.id for c in filter_cargos(_cargos(), DRIVERS, CargoListFilter(search_term=term))]

        assert search("omaha") == ["2"]
        assert search("FRAGILE") == ["1"]
        assert search("mike") == ["2"]
        assert search("c-4") == ["4"]
        assert search("not assigned") == ["4"]


class TestHelpers:

    def test_driver_name_fallback(self):
        assert driver_name(DRIVERS, "d1") == "Jane Smith"
        assert driver_name(DRIVERS, "") == "Not Assigned"

    def test_unpaid_delivered(self):
        assert [c.id for c in unpaid_delivered_cargos(_cargos())] == ["4"]

    def test_dashboard_counts(self):
        counts = dashboard_counts(_cargos() + [make_cargo("5", status=CargoStatus.PICKED_UP)])
        assert (counts.active, counts.booked, counts.unpaid_delivered) == (2, 1, 1)

    def test_search_drivers(self):
        assert [d.id for d in search_drivers(DRIVERS, "SMI")] == ["d1"]
        assert len(search_drivers(DRIVERS, "")) == 2
