"""
Field activity schemas.

Pydantic models for meeting, sample and sale endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fieldtrack.features.tracking.schemas import LocationIn
from fieldtrack.shared.constants import (
    ContactCategory,
    DeliveryStatus,
    MeetingType,
    PaymentMode,
    PaymentStatus,
    SamplePurpose,
    SaleType,
)


# === Requests ===

class BusinessPotential(BaseModel):
    estimated_volume_kg: Optional[float] = Field(default=None, ge=0)
    estimated_frequency: Optional[str] = None  # monthly, quarterly...
    likelihood: Optional[str] = None  # LOW / MEDIUM / HIGH


class MeetingRequest(BaseModel):
    """
    Meeting payload.

    `type` is only read by the generic /meeting endpoint; the one-to-one
    and group endpoints set it themselves.
    """

    type: MeetingType = MeetingType.ONE_TO_ONE
    location: Optional[LocationIn] = None

    # One-to-one
    person_name: str = ""
    contact_number: str = ""
    category: ContactCategory = ContactCategory.FARMER
    business_potential: Optional[BusinessPotential] = None

    # Group
    attendees_count: int = Field(default=0, ge=0)
    meeting_kind: str = ""

    village: str = ""
    district: str = ""
    state: str = ""
    notes: str = ""

    follow_up_required: bool = False
    follow_up_date: Optional[datetime] = None


class SampleRequest(BaseModel):
    """Sample distribution payload."""

    product_name: str = Field(min_length=1)
    product_sku: str = ""
    quantity: Optional[float] = Field(default=None, ge=0)
    unit: str = ""

    recipient_name: str = ""
    recipient_contact: str = ""
    recipient_category: Optional[ContactCategory] = None

    purpose: Optional[SamplePurpose] = None
    expected_feedback_date: Optional[datetime] = None

    location: Optional[LocationIn] = None
    village: str = ""
    district: str = ""
    state: str = ""


class SampleFeedbackRequest(BaseModel):
    feedback_notes: str = ""
    converted_to_sale: bool = False


class SaleRequest(BaseModel):
    """
    Sale payload.

    A missing or non-positive quantity counts as one pack; a missing or
    non-positive price counts as zero.
    """

    product_name: str = Field(min_length=1)
    product_sku: str = ""
    pack_size: str = ""
    quantity: Optional[int] = None
    price_per_unit: Optional[float] = None

    sale_type: SaleType = SaleType.B2C
    farmer_name: str = ""
    farmer_contact: str = ""
    distributor_name: str = ""
    distributor_contact: str = ""
    distributor_type: str = ""

    is_repeat_order: bool = False
    payment_mode: PaymentMode = PaymentMode.CASH
    payment_status: PaymentStatus = PaymentStatus.PAID
    delivery_status: DeliveryStatus = DeliveryStatus.IMMEDIATE
    delivery_date: Optional[datetime] = None

    location: Optional[LocationIn] = None
    village: str = ""
    district: str = ""
    state: str = ""
    notes: str = ""


# === Responses ===

class _RecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    officer_id: str
    village: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    address: Optional[str] = None
    created_at: datetime

    # Tagged fix written to the location log, if any
    location_id: Optional[int] = None


class MeetingResponse(_RecordResponse):
    type: str
    person_name: Optional[str] = None
    contact_number: Optional[str] = None
    category: str
    business_potential: Optional[dict] = None
    attendees_count: Optional[int] = None
    meeting_kind: Optional[str] = None
    notes: Optional[str] = None
    follow_up_required: bool = False
    follow_up_date: Optional[datetime] = None
    status: str


class SampleResponse(_RecordResponse):
    product_name: str
    product_sku: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_contact: Optional[str] = None
    recipient_category: Optional[str] = None
    purpose: Optional[str] = None
    expected_feedback_date: Optional[datetime] = None
    feedback_received: bool = False
    feedback_notes: Optional[str] = None
    converted_to_sale: bool = False


class SaleResponse(_RecordResponse):
    product_name: str
    product_sku: Optional[str] = None
    pack_size: Optional[str] = None
    quantity: int
    price_per_unit: float
    total_amount: float
    sale_type: str
    farmer_name: Optional[str] = None
    farmer_contact: Optional[str] = None
    distributor_name: Optional[str] = None
    distributor_contact: Optional[str] = None
    distributor_type: Optional[str] = None
    is_repeat_order: bool = False
    payment_mode: str
    payment_status: str
    delivery_status: str
    delivery_date: Optional[datetime] = None
    notes: Optional[str] = None
