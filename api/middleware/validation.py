# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request validation error formatting.

flask-openapi3 validates path, query and body models declared on the view
functions; this module turns its pydantic errors into HAL problem responses.
"""

from flask import request, jsonify, Response
from typing import Callable, Dict, Any, List
from pydantic import ValidationError
from opentelemetry import trace
import logging

from services.hal import HalFormatter

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


class ValidationMiddleware:
    """Formats request validation failures as HAL responses."""

    def __init__(self, hal_formatter: HalFormatter):
        self.hal_formatter = hal_formatter

    def format_validation_errors(self, validation_error: ValidationError) -> List[Dict[str, Any]]:
        """
        Format Pydantic validation errors for API response.

        Args:
            validation_error: Pydantic ValidationError

        Returns:
            List of formatted error dictionaries
        """
        errors = []

        for error in validation_error.errors():
            field_path = ".".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input")
            })

        return errors

    def handle_validation_error(self, validation_error: ValidationError) -> Response:
        """Build the 400 response for a failed request validation."""
        with tracer.start_as_current_span("validation.request_rejected") as span:
            validation_errors = self.format_validation_errors(validation_error)
            span.set_attributes({
                "validation.model": validation_error.title,
                "validation.error_count": len(validation_errors),
                "http.method": request.method,
                "http.path": request.path
            })

            logger.warning(
                "Request validation failed",
                extra={
                    "model": validation_error.title,
                    "path": request.path,
                    "method": request.method,
                    "errors": validation_errors
                }
            )

            error_response = self.hal_formatter.format_validation_error(
                f"Request validation failed for {validation_error.title}",
                request.path,
                validation_errors
            )
            response = jsonify(error_response)
            response.status_code = 400
            return response


def make_validation_error_callback(validation_middleware: ValidationMiddleware) -> Callable:
    """
    Adapter for flask-openapi3's ``validation_error_callback`` hook.

    Args:
        validation_middleware: ValidationMiddleware instance

    Returns:
        Callable taking a ValidationError and returning a Flask response
    """
    return validation_middleware.handle_validation_error
