#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field


class VolunteerRef(BaseModel):
    """Request body naming a volunteer."""
    volunteer_id: str = Field(..., min_length=1, description="Volunteer id")
