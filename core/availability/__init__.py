"""Availability Module - Boxer availability slots."""
from core.availability.models import AvailabilityRecord

__all__ = ['AvailabilityRecord']
