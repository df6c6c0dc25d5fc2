from typing import Literal
from pydantic import BaseModel


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str


class DeleteAccountRequest(BaseModel):
    # Must be typed out literally
    confirm: Literal["DELETE"]
