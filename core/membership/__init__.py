"""Membership Module - Club membership request types."""
from core.membership.models import MembershipStatus, MembershipRequestRecord

__all__ = ['MembershipStatus', 'MembershipRequestRecord']
