#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core Module
===========
Components shared by every nesting module.
"""

# Exceptions
from core.exceptions import (
    NestingError,
    ValidationError,
    InvalidGeometryError,
    InvalidFieldValueError,
    ConfigurationError,
    NoFeasibleSheetError,
    ConfigFileError
)

__all__ = [
    # Exceptions
    'NestingError',
    'ValidationError',
    'InvalidGeometryError',
    'InvalidFieldValueError',
    'ConfigurationError',
    'NoFeasibleSheetError',
    'ConfigFileError',
]
