from typing import Optional, Type, TypeVar
import logging

import pydantic
from pydantic import TypeAdapter

from core.errors import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

def parse_query_params(raw: Optional[str], target: Type[T]) -> T:
    """Decode the JSON-encoded QUERY_PARAMS value into `target`"""
    if not raw:
        raise ValidationError("QUERY_PARAMS must be provided.")
    try:
        return TypeAdapter(target).validate_json(raw)
    except pydantic.ValidationError as e:
        logger.debug(f"Rejected QUERY_PARAMS: {e}")
        raise ValidationError("QUERY_PARAMS must be valid JSON of the expected shape.") from e
