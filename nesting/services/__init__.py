"""Nesting services."""

from .nesting_service import NestingService

__all__ = ['NestingService']
