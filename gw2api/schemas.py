"""
Response models for the Guild Wars 2 API endpoints used by the generator.
"""
from typing import Set
from pydantic import BaseModel, Field


class RemoteCharacter(BaseModel):
    """Core record of a character on the account."""
    name: str = Field(..., description="Character name")
    race: str = Field(..., description="Race, e.g. 'Charr'")
    profession: str = Field(..., description="Profession, e.g. 'Engineer'")


class Season(BaseModel):
    """Story season and the story ids it contains."""
    id: str = Field(..., description="Season UUID")
    story_ids: Set[int] = Field(..., alias="stories", description="Story ids in this season")


class Quest(BaseModel):
    """Single quest from the quest catalog."""
    id: int = Field(..., description="Quest id")
    name: str = Field(..., description="Quest name")
    story_id: int = Field(..., alias="story", description="Story the quest belongs to")
