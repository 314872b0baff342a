"""
Data Models Module
----------------
Contains Pydantic models for data validation and serialization.
Defines the structure of camp and course data with appropriate field types and constraints.
"""
from typing import Dict, List

from pydantic import ValidationError

from src.errors import ValidationFailure


def validation_messages(error: ValidationError) -> List[str]:
    """Flatten a pydantic ValidationError into one message per offending field."""
    messages = []
    seen = set()
    for item in error.errors():
        field = str(item["loc"][0]) if item["loc"] else "body"
        if field in seen:
            continue
        seen.add(field)
        message = item["msg"]
        # Custom validators raise ValueError, pydantic prefixes those
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{field}: {message}")
    return messages


def parse_payload(schema, data):
    """Validate raw input against a schema, raising ValidationFailure on any violation."""
    try:
        return schema.model_validate(data or {})
    except ValidationError as e:
        raise ValidationFailure(validation_messages(e)) from e


def reject_nulls(changes: Dict, required: Dict[str, str]):
    """Partial updates may omit a required field but never null it out."""
    messages = [
        f"{field}: {message}"
        for field, message in required.items()
        if field in changes and changes[field] is None
    ]
    if messages:
        raise ValidationFailure(messages)
