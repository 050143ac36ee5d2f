"""
Unified constants for roles, tracking tags and field activity records.

Single source of truth for the string values stored in the database
and accepted over the API.
"""

from enum import Enum


class UserRole(str, Enum):
    """
    Role of an application user.

    Used in:
    - Signup (role is upper-cased before storing)
    - Bearer token payload
    - Route guards (field vs admin endpoints)
    """
    ADMIN = "ADMIN"
    FIELD = "FIELD"
    USER = "USER"


class FixActivity(str, Enum):
    """What the officer was doing when a location fix was captured."""
    TRAVEL = "TRAVEL"
    MEETING = "MEETING"
    SAMPLE = "SAMPLE"
    SALE = "SALE"


# Default role for signups that do not send one
DEFAULT_SIGNUP_ROLE = UserRole.USER


class MeetingType(str, Enum):
    ONE_TO_ONE = "ONE_TO_ONE"
    GROUP = "GROUP"


class ContactCategory(str, Enum):
    """Who the officer met or handed a sample to."""
    FARMER = "FARMER"
    SELLER = "SELLER"
    INFLUENCER = "INFLUENCER"
    VETERINARIAN = "VETERINARIAN"


class MeetingStatus(str, Enum):
    COMPLETED = "COMPLETED"
    PENDING_FOLLOWUP = "PENDING_FOLLOWUP"
    CONVERTED = "CONVERTED"


class SamplePurpose(str, Enum):
    TRIAL = "TRIAL"
    DEMO = "DEMO"
    TRAINING = "TRAINING"
    FOLLOWUP = "FOLLOWUP"


class SaleType(str, Enum):
    """B2C sells to a farmer directly, B2B to a distributor or reseller."""
    B2C = "B2C"
    B2B = "B2B"


class PaymentMode(str, Enum):
    CASH = "CASH"
    UPI = "UPI"
    CREDIT = "CREDIT"
    BANK_TRANSFER = "BANK_TRANSFER"


class PaymentStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"


class DeliveryStatus(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    SCHEDULED = "SCHEDULED"
    DELIVERED = "DELIVERED"
