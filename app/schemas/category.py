"""
Pydantic схемы для категорий.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validators import require_text


class CategoryCreate(BaseModel):
    """Схема для создания и переименования категории."""

    name: str = Field(..., min_length=3, max_length=50, description="Название категории")

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value):
        if isinstance(value, str):
            return require_text(value)
        return value


class CategoryOut(BaseModel):
    """Схема для вывода категории."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
