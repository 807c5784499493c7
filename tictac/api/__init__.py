"""
API Module - JSON snapshot models for a front end.

A UI:
1. Sends SelectSideRequest / MoveRequest
2. Receives GameStateResponse / MoveResponse to render
3. Receives ErrorResponse when a request is rejected

No transport is included; any front end can serialize these models.
"""

from .schemas import (
    SideSchema,
    StatusSchema,
    PositionInfo,
    GameStateResponse,
    SelectSideRequest,
    MoveRequest,
    MoveResponse,
    ErrorResponse,
)

__all__ = [
    "SideSchema",
    "StatusSchema",
    "PositionInfo",
    "GameStateResponse",
    "SelectSideRequest",
    "MoveRequest",
    "MoveResponse",
    "ErrorResponse",
]
