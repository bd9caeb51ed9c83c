# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging and attribute-name inflection

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and context binding
- Attribute-name humanization for labels and error messages

Data Flow: Supporting services for the presenter and persistence layers
"""

from . import logging
from .inflection import humanize

__all__ = [
    "humanize",
    "logging",
]
