"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable, compared by value.

    Whitespace is stripped from every string field, so a submitted name of
    " Jo " and one of "Jo" are the same value.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        arbitrary_types_allowed=True,
    )
