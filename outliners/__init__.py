from .arrows import Arrow, CurvePath
from .associations import Association
from .geometry import Box, Vector
from .panels import Panel
from .world import World

__all__ = ["Arrow", "Association", "Box", "CurvePath", "Panel", "Vector", "World"]
