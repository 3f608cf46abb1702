from .world import World
from .view import SystemView

__all__ = ["World", "SystemView"]
