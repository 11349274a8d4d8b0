"""
Pydantic models for user configuration.
"""

from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field


class DeviceConfig(BaseModel):
    """User configuration for a device (custom name, etc)."""

    vendor_id: str
    product_id: str
    custom_name: Optional[str] = None
    notes: Optional[str] = None


class AppConfig(BaseModel):
    """Application configuration."""

    colored: bool = Field(default=True, description="Colour output by tree depth")
    show_header: bool = Field(default=True, description="Print a header line per bus")
    ascii: bool = Field(default=False, description="Use ASCII connectors instead of box drawing")
    indent: str = Field(default="    ")
    devices: list[DeviceConfig] = Field(default_factory=list)
