from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Date, DateTime, String, Text
from sqlalchemy import Enum as SAEnum
from datetime import date, datetime
import uuid
from typing import Optional

from labdesk.core.clock import utc_now
from labdesk.models.enums import ComputerStatus


class Computer(SQLModel, table=True):
    __tablename__ = "computers"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    system_id: str = Field(
        sa_column=Column(String, nullable=False, unique=True, index=True)
    )
    name: str = Field(nullable=False)

    # Hardware descriptors
    location: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    processor: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    ram: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    storage: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    os_version: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))

    purchase_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    warranty_expiry: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    status: ComputerStatus = Field(
        default=ComputerStatus.available,
        sa_column=Column(SAEnum(ComputerStatus, name="computer_status"), nullable=False)
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
