from pydantic import BaseModel, field_serializer
from datetime import datetime

from app.db.Models.models import iso_timestamp

class LinkResponse(BaseModel):
    id: int
    code: str
    original_url: str
    access_count: int
    created_at: datetime
    short_url: str

    model_config = {"from_attributes": True}

    # Same UTC "Z" form as the CSV export
    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return iso_timestamp(value)
