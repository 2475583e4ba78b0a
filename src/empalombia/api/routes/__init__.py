"""Route group exports."""

from . import geocode, health, orders, shipping

__all__ = ["geocode", "health", "orders", "shipping"]
