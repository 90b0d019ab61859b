from __future__ import annotations
from pydantic import BaseModel


class UserRead(BaseModel):
    id: str
    email: str
    name: str

    model_config = {"from_attributes": True}
