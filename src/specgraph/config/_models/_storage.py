"""Storage configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class StorageConfig(BaseModel):
    """Storage configuration section.

    Attributes:
        specs_dir: Directory holding requirements/, plans/, and components/,
            relative to the project root unless absolute.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    specs_dir: str = Field(default="specs", min_length=1)
