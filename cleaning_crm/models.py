from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Float, nullable=True)
    # Recurring schedule preferences
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_days = Column(String(255), nullable=True)  # e.g. "Tuesday, Friday"
    recurrence_frequency = Column(String(50), nullable=True)  # Weekly, Bi-weekly, Monthly
    recurring_start_time = Column(String(20), nullable=True)  # e.g. "9:00 AM"
    recurring_end_time = Column(String(20), nullable=True)
    first_cleaning_date = Column(Date, nullable=True)
    preferred_cleaner_ids = Column(JSON, default=list, nullable=True)  # First entry is primary
    # Pricing
    pricing_type = Column(String(50), nullable=True)  # Per Cleaning, Hourly Rate
    charge_per_cleaning = Column(Float, nullable=True)
    hourly_rate = Column(Float, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    jobs = relationship("Job", back_populates="client")


class Cleaner(Base):
    __tablename__ = "cleaners"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    hourly_rate = Column(Float, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    cleaner_ids = Column(JSON, default=list, nullable=True)
    date = Column(Date, nullable=True, index=True)
    start_time = Column(String(20), nullable=True)  # "H:MM AM/PM"
    end_time = Column(String(20), nullable=True)
    duration_hours = Column(Float, nullable=True)
    actual_hours = Column(Float, nullable=True)
    # Pending, Scheduled, In Progress, Completed, Cancelled
    status = Column(String(50), default="Scheduled", nullable=False, index=True)
    service_type = Column(String(50), nullable=True)  # General Clean, Deep Clean, Move-In-Out
    address = Column(Text, nullable=True)
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Float, nullable=True)
    amount_charged = Column(Float, nullable=True)
    client_hourly_rate = Column(Float, nullable=True)
    profit = Column(Float, nullable=True)
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurrence_frequency = Column(String(50), nullable=True)
    # History - never touched by the scheduling engine
    payment_status = Column(String(50), nullable=True)  # Pending, Paid, Refunded
    completion_notes = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="jobs")
