"""
Module: models
Description: Package initialization for Pydantic data models.

- Config: Caller-provided client settings
- CustomAttribute: Typed message metadata
- DataType: Data type tags for custom attributes
"""

from .config import DEFAULT_EXTENSION_LIMIT, ROUTE_ATTRIBUTE, Config, CustomAttribute, DataType

__all__ = [
    "DEFAULT_EXTENSION_LIMIT",
    "ROUTE_ATTRIBUTE",
    "Config",
    "CustomAttribute",
    "DataType",
]
