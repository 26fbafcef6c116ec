from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional

class AskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: Optional[str] = None
    # Любое значение: решает только истинность (false, 0, [] — картинки нет)
    image_url: Any = Field(default=None, alias="imageUrl")

class AskResponse(BaseModel):
    answer: str

class ErrorResponse(BaseModel):
    error: str
