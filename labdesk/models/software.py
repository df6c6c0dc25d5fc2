from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Date, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from datetime import date, datetime
import uuid
from typing import Optional

from labdesk.core.clock import utc_now


# ------------------------------------------------------------
# 1. SOFTWARE / LICENSE
# ------------------------------------------------------------
class Software(SQLModel, table=True):
    __tablename__ = "software"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    name: str = Field(nullable=False)
    version: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    vendor: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    license_key: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    license_expiry: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))


# ------------------------------------------------------------
# 2. INSTALLATIONS (computer <-> software)
# ------------------------------------------------------------
class ComputerSoftware(SQLModel, table=True):
    __tablename__ = "computer_software"
    __table_args__ = (
        UniqueConstraint("computer_id", "software_id", name="uq_computer_software"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    computer_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("computers.id", ondelete="CASCADE"), nullable=False)
    )
    software_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("software.id"), nullable=False)
    )

    installed_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
