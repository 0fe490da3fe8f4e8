"""
JSON object mapping for geoops models.
Failures are logged and returned as None.
"""

import logging
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def to_json(obj: Optional[BaseModel]) -> Optional[str]:
    """Serialize a model to JSON, leaving out None fields."""
    if obj is None:
        return None
    try:
        return obj.model_dump_json(exclude_none=True)
    except PydanticSerializationError as exc:
        logger.error("to_json failed: message=%s obj=%r", exc, obj)
        return None


def from_json(text: Optional[str], model_cls: type[ModelT]) -> Optional[ModelT]:
    """Parse JSON into ``model_cls``; blank or invalid input gives None."""
    if text is None or not text.strip():
        return None
    try:
        return model_cls.model_validate_json(text)
    except ValidationError as exc:
        logger.error("from_json failed: message=%s json=%r model=%s", exc, text, model_cls.__name__)
        return None
