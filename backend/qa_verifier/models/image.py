"""Container image identity."""

from pydantic import BaseModel, ConfigDict, Field


class ImageIdentity(BaseModel):
    """An image split into repository and content digest."""

    model_config = ConfigDict(frozen=True)

    image_id: str = Field(..., description="Scheme-less reference (e.g. gcr.io/p/app@sha256:...)")
    repository: str = Field(..., min_length=1, description="Repository (e.g. gcr.io/p/app)")
    digest: str = Field(..., min_length=1, description="Content digest (e.g. sha256:<hex>)")
