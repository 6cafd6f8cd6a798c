"""Helpers shared by the service layer."""

from pydantic import BaseModel

from ..domain.exceptions import ValidationException


def changed_fields(data: BaseModel, partial: bool) -> dict:
    """
    Extract the fields an update should write.

    A partial update takes only fields the client sent; none of them may be
    null since every column is required.

    Raises:
        ValidationException: If there is nothing to update or a field is null
    """
    fields = data.model_dump(exclude_unset=partial)

    if not fields:
        raise ValidationException("body", "{}", "No fields to update")

    for name, value in fields.items():
        if value is None:
            raise ValidationException(name, value, "Field cannot be null")

    return fields
