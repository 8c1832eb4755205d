#!/usr/bin/env python3
"""
Domain exceptions raised by the core services.

The web layer maps each family to an HTTP status:
NotFoundException -> 404, ForbiddenException -> 403,
ValidationException / StateConflictException -> 400.
"""

from typing import Optional


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


# Not found

class NotFoundException(ServiceException):
    """Raised when a referenced entity does not exist."""
    pass


class BoxerNotFoundException(NotFoundException):
    """Raised when a boxer profile is not found."""
    pass


class MatchRequestNotFoundException(NotFoundException):
    """Raised when a match request is not found."""
    pass


class ClubNotFoundException(NotFoundException):
    """Raised when a club is not found."""
    pass


class MembershipRequestNotFoundException(NotFoundException):
    """Raised when a club membership request is not found."""
    pass


class AvailabilityNotFoundException(NotFoundException):
    """Raised when an availability slot is not found."""
    pass


# Business rules

class ValidationException(ServiceException):
    """Raised when a request breaks a business rule."""
    pass


class SelfRequestException(ValidationException):
    """Raised when a boxer sends a match request to themselves."""
    pass


class BoxerUnavailableException(ValidationException):
    """Raised when the target boxer is not searchable."""
    pass


class IncompatibleBoxersException(ValidationException):
    """Raised when two boxers fall outside the matching tolerances."""
    pass


class DuplicateMatchRequestException(ValidationException):
    """Raised when a pending request already exists for the same pair."""
    pass


class ReverseMatchRequestException(ValidationException):
    """Raised when the target already has a pending request to the requester."""
    pass


class MissingBoxerProfileException(ValidationException):
    """Raised when an operation needs a boxer profile the user does not have."""
    pass


class InvalidTimeRangeException(ValidationException):
    """Raised when an availability slot ends before it starts."""
    pass


class OverlappingAvailabilityException(ValidationException):
    """Raised when a slot overlaps another slot of the same boxer on that date."""
    pass


# Authorization

class ForbiddenException(ServiceException):
    """Raised when the acting user may not perform the operation."""
    pass


# State

class StateConflictException(ServiceException):
    """Raised when an action is attempted on a request that is no longer pending."""

    def __init__(self, message: str, current_status: Optional[str] = None):
        super().__init__(message)
        self.current_status = current_status


class MatchRequestExpiredException(StateConflictException):
    """Raised when a pending match request is past its expiry."""

    def __init__(self, message: str = "This match request has expired"):
        super().__init__(message, current_status="EXPIRED")
