from pydantic import BaseModel, Field

class LinkCreatedResponse(BaseModel):
    id: int
    code: str
    # short_url is the Python field, 'shortUrl' is the JSON key
    short_url: str = Field(..., alias="shortUrl")

    class Config:
        populate_by_name = True
