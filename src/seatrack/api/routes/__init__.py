"""Route group exports."""

from . import ais, bottlenecks, carriers, health, routes, vessels

__all__ = ["health", "routes", "bottlenecks", "vessels", "ais", "carriers"]
