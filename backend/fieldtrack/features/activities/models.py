"""
Field activity models.

Models:
- Meeting: One-to-one or group meeting with farmers, sellers, influencers
- SampleDistribution: Product sample handed out, with later feedback
- Sale: B2C or B2B sale recorded in the field

Each record keeps the location where it was logged. The matching
LocationFix (tagged MEETING / SAMPLE / SALE) lives in the tracking log.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Float, Integer, Boolean, Text, JSON, ForeignKey
import uuid

from fieldtrack.models.base import Base
from fieldtrack.shared.constants import (
    ContactCategory,
    DeliveryStatus,
    MeetingStatus,
    PaymentMode,
    PaymentStatus,
)


class Meeting(Base):
    """
    Meeting logged by a field officer.

    ONE_TO_ONE meetings carry person details, GROUP meetings carry
    attendee count and meeting kind (demo, training, feedback...).
    """

    __tablename__ = "meetings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    officer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # MeetingType

    # Person (ONE_TO_ONE)
    person_name = Column(String(100), nullable=True)
    contact_number = Column(String(20), nullable=True)
    category = Column(String(20), nullable=False, default=ContactCategory.FARMER.value)
    business_potential = Column(JSON, nullable=True)  # estimated_volume_kg, frequency, likelihood

    # Group
    attendees_count = Column(Integer, nullable=True)
    meeting_kind = Column(String(50), nullable=True)

    # Place
    village = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    address = Column(String(500), nullable=True)

    notes = Column(Text, nullable=True)

    # Follow-up
    follow_up_required = Column(Boolean, nullable=False, default=False)
    follow_up_date = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=False, default=MeetingStatus.COMPLETED.value)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Meeting {self.id} {self.type} officer={self.officer_id}>"


class SampleDistribution(Base):
    """Product sample given to a prospective customer."""

    __tablename__ = "sample_distributions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    officer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Product
    product_name = Column(String(200), nullable=False)
    product_sku = Column(String(50), nullable=True)
    quantity = Column(Float, nullable=True)
    unit = Column(String(20), nullable=True)  # kg, litre, packet

    # Recipient
    recipient_name = Column(String(100), nullable=True)
    recipient_contact = Column(String(20), nullable=True)
    recipient_category = Column(String(20), nullable=True)  # ContactCategory

    purpose = Column(String(20), nullable=True)  # SamplePurpose
    expected_feedback_date = Column(DateTime, nullable=True)

    # Place
    village = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    address = Column(String(500), nullable=True)

    # Feedback
    feedback_received = Column(Boolean, nullable=False, default=False)
    feedback_notes = Column(Text, nullable=True)
    converted_to_sale = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<SampleDistribution {self.id} {self.product_name} x{self.quantity}>"


class Sale(Base):
    """
    Sale recorded in the field.

    total_amount is quantity * price_per_unit, fixed at creation.
    """

    __tablename__ = "sales"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    officer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Product
    product_name = Column(String(200), nullable=False)
    product_sku = Column(String(50), nullable=True)
    pack_size = Column(String(20), nullable=True)  # "1kg", "500ml"
    quantity = Column(Integer, nullable=False, default=1)
    price_per_unit = Column(Float, nullable=False, default=0.0)
    total_amount = Column(Float, nullable=False, default=0.0)

    sale_type = Column(String(5), nullable=False)  # SaleType

    # Customer: farmer for B2C, distributor for B2B
    farmer_name = Column(String(100), nullable=True)
    farmer_contact = Column(String(20), nullable=True)
    distributor_name = Column(String(100), nullable=True)
    distributor_contact = Column(String(20), nullable=True)
    distributor_type = Column(String(50), nullable=True)

    # Order
    is_repeat_order = Column(Boolean, nullable=False, default=False)
    payment_mode = Column(String(20), nullable=False, default=PaymentMode.CASH.value)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PAID.value)
    delivery_status = Column(String(20), nullable=False, default=DeliveryStatus.IMMEDIATE.value)
    delivery_date = Column(DateTime, nullable=True)

    # Place
    village = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    address = Column(String(500), nullable=True)

    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Sale {self.id} {self.sale_type} {self.total_amount}>"
