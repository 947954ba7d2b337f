"""
Module: config
Description: Environment backed settings for sqsbridge.
"""

from .settings import Settings

__all__ = ["Settings"]
