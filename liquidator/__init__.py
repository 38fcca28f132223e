"""Fee liquidator: unwinds LP fee positions and routes them into one asset."""

from liquidator.config import ConfigurationStore, LiquidatorSettings, ManagerConfig
from liquidator.manager import BatchReceipt, FeeManager

__version__ = "0.1.0"
__all__ = [
    "FeeManager",
    "BatchReceipt",
    "ManagerConfig",
    "ConfigurationStore",
    "LiquidatorSettings",
    "__version__",
]
