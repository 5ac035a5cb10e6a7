from linalgviz.ops.interaction import (
    ROTATE_GAIN,
    DragSession,
    begin_drag,
    delete_selected,
    seed_example_scene,
    toggle_selected_visibility,
)
from linalgviz.ops.replay import ReplayResult, load_script, replay_script

__all__ = [
    "ROTATE_GAIN",
    "DragSession",
    "begin_drag",
    "delete_selected",
    "seed_example_scene",
    "toggle_selected_visibility",
    "ReplayResult",
    "load_script",
    "replay_script",
]
