# tubely/services/schemas/videos.py
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500, examples=["Boots in the wild"])
    description: Optional[str] = Field(None, max_length=5000)


class VideoRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = Field(None, examples=["https://tubely-media.s3.eu-central-1.amazonaws.com/Xk3...q0.png"])
    video_url: Optional[str] = Field(None, examples=["https://tubely-media.s3.eu-central-1.amazonaws.com/landscape/Xk3...q0.mp4"])
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
