"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_design,
    DesignFormatError,
    DESIGN_SCHEMA_VERSION,
)

__all__ = [
    "validate_design",
    "DesignFormatError",
    "DESIGN_SCHEMA_VERSION",
]
