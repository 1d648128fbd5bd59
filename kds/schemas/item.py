"""
Pydantic schemas for menu item request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class ItemCreate(BaseModel):
    """Schema for creating a menu item"""
    code: Optional[str] = Field(None, description="Short menu code")
    name: Optional[str] = Field(None, description="Item name (required)")
    price: Optional[float] = Field(None, description="Item price, defaults to 0")
    category: Optional[str] = Field(None, description="Menu category")


class ItemResponse(BaseModel):
    """Schema for item response"""
    id: int
    code: str
    name: str
    price: float
    category: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ItemCreatedResponse(BaseModel):
    ok: bool = True
    id: int


class CsvImportResponse(BaseModel):
    ok: bool = True
    inserted: int


class ErrorResponse(BaseModel):
    """Error body returned for every 4xx/5xx"""
    error: str
