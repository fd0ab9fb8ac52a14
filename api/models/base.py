# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Base models with common configuration and validation.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ImmutableModel(BaseModel):
    """Base for loaded reference data that must never change after validation."""
    
    model_config = ConfigDict(
        # Accept both snake_case field names and camelCase wire names
        populate_by_name=True,
        alias_generator=to_camel,
        # Use enum values instead of enum objects
        use_enum_values=True,
        frozen=True
    )
    
    def to_wire(self) -> dict:
        """Serialize with the camelCase names the web client consumes."""
        return self.model_dump(mode="json", by_alias=True)


class RequestModel(BaseModel):
    """Base model for API request payloads."""
    
    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        str_strip_whitespace=True
    )
