"""Route resolution for converting fee assets into the output asset."""

from liquidator.routing.resolver import PathResolver
from liquidator.routing.types import DirectRoute, SingleHopRoute, SwapRoute

__all__ = ["PathResolver", "DirectRoute", "SingleHopRoute", "SwapRoute"]
