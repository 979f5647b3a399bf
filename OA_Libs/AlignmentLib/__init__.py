"""
AlignmentLib - Overlay alignment models

This module provides the position model, the drag state machine, the nudge
controller and the opacity model that together describe how the overlay
image sits on top of the base image.
"""

from OA_Libs.AlignmentLib.position_model import ORIGIN, Position, PositionModel
from OA_Libs.AlignmentLib.drag_state_machine import DragSession, DragState, DragStateMachine
from OA_Libs.AlignmentLib.nudge_controller import NudgeController, NudgeDirection
from OA_Libs.AlignmentLib.opacity_model import OpacityModel, clamp_opacity

__all__ = [
    "ORIGIN",
    "Position",
    "PositionModel",
    "DragSession",
    "DragState",
    "DragStateMachine",
    "NudgeController",
    "NudgeDirection",
    "OpacityModel",
    "clamp_opacity",
]
