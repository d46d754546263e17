from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecipeInfo(BaseModel):
    """Structured recipe metadata extracted by the LLM.

    Optional fields are ``None`` when the model reported nothing usable for
    them; they are never empty strings.
    """

    model_config = ConfigDict(frozen=True)

    ingredients: List[str] = Field(default_factory=list)
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    total_time: Optional[str] = None
    servings: Optional[str] = None
