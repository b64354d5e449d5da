"""
Base model configuration for request payloads
"""

from pydantic import BaseModel as PydanticBaseModel, ConfigDict


class BaseModel(PydanticBaseModel):
    """Base model for untrusted JSON payloads.

    This base model configuration:
    - Ignores unknown fields, so clients may send whole records back (ids, timestamps)
    - Keeps snake_case field names, matching the stored column names
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        # Input models are read-only once validated
        frozen=True,
    )
