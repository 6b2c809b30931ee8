"""Route group exports."""

from . import health, stations, trips

__all__ = ["trips", "stations", "health"]
