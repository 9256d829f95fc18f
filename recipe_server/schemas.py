from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RecipeBase(BaseModel):
    name: str = Field(
        ..., min_length=1, json_schema_extra={"example": "Simple Pancakes"}
    )
    description: str = Field(
        ..., json_schema_extra={"example": "Fluffy pancakes for a lazy Sunday"}
    )
    photo: str = Field(
        ..., json_schema_extra={"example": "https://example.com/pancakes.jpg"}
    )


class RecipeCreate(RecipeBase):
    pass


class RecipePatch(BaseModel):
    # unknown keys are rejected rather than silently dropped
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    photo: Optional[str] = None


class Recipe(RecipeBase):
    id: int


class MutationResult(BaseModel):
    status: str
    id: int
    requested_id: Optional[int] = None
