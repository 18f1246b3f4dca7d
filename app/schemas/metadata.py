# app/schemas/metadata.py

from pydantic import BaseModel


class MemberRead(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class WorkLineRead(BaseModel):
    id: str
    project_id: str | None = None
    name: str
    color: str | None = None

    model_config = {"from_attributes": True}
