"""
Custom exceptions for the Members Game app.

This module defines domain-specific exceptions for better error handling
and debugging throughout the application.
"""


class MembersGameError(Exception):
    """Base exception for all application errors."""

    pass


class TeamAssignmentError(MembersGameError):
    """Raised when a group cannot be placed into any team with room for it.

    The team-size plan always fits the roster exactly, so this means a group
    is larger than every planned team. The caller must fix the roster.
    """

    def __init__(self, group_size: int):
        self.group_size = group_size
        super().__init__(
            f"Unable to place group of size {group_size} within team capacities"
        )


class ValidationError(MembersGameError):
    """Raised when input validation fails."""

    pass
