"""Runtime configuration, projection, interaction and logging."""

from eventscope.runtime.config import InspectorConfig, load_inspector_config
from eventscope.runtime.interaction import CursorInteractionMachine
from eventscope.runtime.projection import TimeScale

__all__ = [
    "CursorInteractionMachine",
    "InspectorConfig",
    "TimeScale",
    "load_inspector_config",
]
