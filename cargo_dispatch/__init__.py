"""Cargo dispatch dashboard: drivers, cargos, ordering and accounting."""

__version__ = "0.1.0"
