"""Shared enums for models."""

from enum import Enum


class Role(str, Enum):
    """User role. Closed set; drives every access decision."""

    ADMIN = "ADMIN"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    TEKKIE = "TEKKIE"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DELAYED = "delayed"


AVATAR_ICONS = ("car", "plane", "ship", "bike", "truck", "bus")
