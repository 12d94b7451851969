"""
API Request/Response Schemas using Pydantic.

Structure of HTTP requests and responses for the folio API. Project bodies
reuse `app.domain.entities.Project`.
"""
from pydantic import BaseModel, Field
from typing import Optional

class RefreshResponse(BaseModel):
    success: bool = Field(..., description="Whether the caches were rebuilt")
    message: str = Field(..., description="Human readable outcome")

class CronErrorResponse(BaseModel):
    error: str = Field(..., description="Short error label")
    details: Optional[str] = Field(None, description="How to fix the request or configuration")

class EmbeddableResponse(BaseModel):
    name: str = Field(..., description="Repository name")
    homepage_url: Optional[str] = Field(None, description="Homepage that was probed")
    embeddable: bool = Field(..., description="Whether the homepage can be shown in an iframe")
