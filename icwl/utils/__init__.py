# icwl/utils/__init__.py

from .load_files import load_config, load_results
from .units import FlowUnit, ureg, flow_volume

__all__ = [
    "load_config",
    "load_results",
    "FlowUnit",
    "ureg",
    "flow_volume"
]
