from pydantic import BaseModel, Field

class CsvExportResponse(BaseModel):
    csv_url: str = Field(..., alias="csvUrl")

    class Config:
        populate_by_name = True
