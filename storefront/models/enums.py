"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles."""

    USER = "user"
    ADMIN = "admin"


DEFAULT_INQUIRY_STATUS = "new"
