"""
Error codes and EngineError exception for rule violations.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    ERR_OUT_OF_RANGE = "ERR_OUT_OF_RANGE"
    ERR_CARD_MISMATCH = "ERR_CARD_MISMATCH"
    ERR_CELL_OCCUPIED = "ERR_CELL_OCCUPIED"
    ERR_NO_REMOVABLE_CHIP = "ERR_NO_REMOVABLE_CHIP"
    ERR_SEQUENCE_PROTECTED = "ERR_SEQUENCE_PROTECTED"
    ERR_EMPTY_SUPPLY = "ERR_EMPTY_SUPPLY"
    ERR_INVALID_PLAYER_COUNT = "ERR_INVALID_PLAYER_COUNT"
    ERR_CARD_NOT_IN_HAND = "ERR_CARD_NOT_IN_HAND"
    ERR_CARD_NOT_DEAD = "ERR_CARD_NOT_DEAD"
    ERR_NOT_YOUR_TURN = "ERR_NOT_YOUR_TURN"
    ERR_GAME_NOT_ACTIVE = "ERR_GAME_NOT_ACTIVE"
    ERR_HAS_LEGAL_MOVE = "ERR_HAS_LEGAL_MOVE"
    ERR_UNKNOWN_PLAYER = "ERR_UNKNOWN_PLAYER"


class EngineError(Exception):
    """Typed, recoverable rejection raised by the engine.

    Attributes:
        code: ErrorCode enum
        message: optional human message (for logs)
        details: optional structured data (e.g. {'cell': 42, 'card': 'AS'})
    """

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.details = details or {}
        super().__init__(message or code.value)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code.value, "details": self.details}


class IntegrityError(AssertionError):
    """Card conservation broke; this is a bug in the engine, not a user error."""
