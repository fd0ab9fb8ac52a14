# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request models for API endpoints.
"""

from typing import Optional
from pydantic import Field, field_validator, model_validator
from .base import RequestModel
from domain.normalization import parse_address_text


class AddressQuery(RequestModel):
    """
    Citizen address input for a polling station search.

    Any subset of the structured fields may be given. The free-form ``q``
    field is parsed into locality/street/number; explicitly given structured
    fields take precedence over the parsed ones.
    """

    locality: Optional[str] = Field(None, max_length=200, description="Locality or sector")
    street: Optional[str] = Field(None, max_length=200, description="Street name")
    number: Optional[str] = Field(None, max_length=20, description="Street number")
    q: Optional[str] = Field(None, max_length=400, description="Free-form address text")

    @field_validator('locality', 'street', 'number', 'q', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Treat blank strings as absent."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @model_validator(mode='after')
    def merge_free_form(self):
        """Fill missing structured fields from the free-form text."""
        if self.q:
            parsed = parse_address_text(self.q)
            # validate_assignment would re-enter this validator
            if self.locality is None:
                object.__setattr__(self, 'locality', parsed.locality)
            if self.street is None:
                object.__setattr__(self, 'street', parsed.street)
            if self.number is None:
                object.__setattr__(self, 'number', parsed.number)
        return self

    def is_empty(self) -> bool:
        """Check whether the query carries any address component."""
        return not (self.locality or self.street or self.number)


class PaginationParams(RequestModel):
    """Pagination parameters for list endpoints."""

    page: int = Field(default=1, ge=1, description="Page number")
    page_size: int = Field(default=20, ge=1, le=100, description="Items per page")


class StationPath(RequestModel):
    """Path parameters identifying a polling station."""

    station_id: str = Field(..., min_length=1, description="Polling station ID")


class LanguagePath(RequestModel):
    """Path parameters identifying a content language."""

    language: str = Field(..., min_length=1, max_length=10, description="Language code")
