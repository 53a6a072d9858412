# icwl/__init__.py

# Import main components
from .hydrology import calculate_hydrology_table, segment1_series
from .channel_metrics import derive_metrics, update_channel, calculate_enhanced_loss
from .formulas import base_loss, enhanced_loss
from .data_structures import CalculatedTableResults, Channel, Month

# Define version
__version__ = "0.1.0"

# Define all importable names
__all__ = [
    "calculate_hydrology_table",
    "segment1_series",
    "derive_metrics",
    "update_channel",
    "calculate_enhanced_loss",
    "base_loss",
    "enhanced_loss",
    "CalculatedTableResults",
    "Channel",
    "Month"
]

# Package metadata
__description__ = "Irrigation channel water loss model"
