"""Upload payload model and file checks applied before anything is sent."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..config import (
    DESCRIPTION_MAX_LENGTH,
    MAX_UPLOAD_BYTES,
    SUPPORTED_IMAGE_TYPES,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)
from ..core.exceptions import ValidationError


class ImageSubmission(BaseModel):
    """Body of ``POST /api/images``."""

    title: str = Field(..., min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    url: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @classmethod
    def parse(cls, payload: ImageSubmission | Mapping[str, Any]) -> ImageSubmission:
        """Coerce ``payload`` into a submission or raise ``ValidationError``."""
        if isinstance(payload, ImageSubmission):
            return payload
        try:
            return cls.model_validate(dict(payload))
        except PydanticValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            raise ValidationError("Invalid image submission", errors=errors) from e

    def to_body(self) -> dict[str, str]:
        return self.model_dump()


def validate_upload(size: int, content_type: str) -> None:
    """Check a picked file before its upload starts.

    Raises:
        ValidationError: listing every rule the file breaks
    """
    errors: list[str] = []
    if size <= 0:
        errors.append("file is empty")
    elif size >= MAX_UPLOAD_BYTES:
        errors.append("file must be smaller than 10MB")
    if not SUPPORTED_IMAGE_TYPES.match(content_type or ""):
        errors.append("only PNG, JPEG and GIF files are accepted")
    if errors:
        raise ValidationError("Invalid image file", errors=errors)
