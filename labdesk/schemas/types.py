from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from labdesk.core.clock import to_naive_utc

# Incoming timestamps may carry an offset; storage is naive UTC.
UTCDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


def not_null(value):
    # Partial updates may omit a required column but never blank it
    if value is None:
        raise ValueError("may not be null")
    return value
