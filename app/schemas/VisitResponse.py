from pydantic import BaseModel

class VisitResponse(BaseModel):
    success: bool = True
