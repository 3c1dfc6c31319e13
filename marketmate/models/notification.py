"""Notification models"""

from datetime import datetime

from pydantic import BaseModel, Field


class Notification(BaseModel):
    """A short user-facing notice (toast)"""
    title: str
    description: str
    destructive: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
