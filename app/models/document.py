from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class Document(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    voornaam: Optional[str] = None
    familienaam: Optional[str] = None
    url: str


class UploadResponse(BaseModel):
    message: str
    document: Document


class ErrorResponse(BaseModel):
    error: str


DocumentList = List[Document]
