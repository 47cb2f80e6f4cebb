"""Pickup ordering backend: menu, orders, pickup time slots."""

__version__ = "1.0.0"
