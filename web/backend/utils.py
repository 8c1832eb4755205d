#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import uuid
from typing import Optional
from datetime import datetime

from fastapi import HTTPException


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Safely convert datetime to ISO format string.

    Args:
        dt: Datetime object.

    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def validate_uuid(value: str, name: str = "id") -> str:
    """Validate that a path id is a valid UUID (400 otherwise)."""
    try:
        uuid.UUID(value)
        return value
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {name} format: {value}. Must be a valid UUID."
        )
