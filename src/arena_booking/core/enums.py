from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    PLAYER = "player"
    EMPLOYEE = "employee"
    SUPERVISOR = "supervisor"


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskCategory(str, Enum):
    COMPUTER_ORGANIZATION = "computer_organization"
    GAME_UPDATES = "game_updates"
    EQUIPMENT_CHECKS = "equipment_checks"
    CLEANING = "cleaning"


class NotificationType(str, Enum):
    BOOKING = "booking"
    SHIFT = "shift"
    SYSTEM = "system"
