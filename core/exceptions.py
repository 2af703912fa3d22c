"""
Nesting - Exceptions
====================
Exception hierarchy for the nesting engine.
"""


class NestingError(Exception):
    """Base exception for every nesting engine error"""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================
# Validation Errors
# ============================================================

class ValidationError(NestingError):
    """Input rejected before any packing attempt"""
    pass


class InvalidGeometryError(ValidationError):
    """Zero, negative or missing part dimensions, or a broken outline"""

    def __init__(self, part_id: str, field: str, value, reason: str = None):
        msg = f"Invalid geometry for part '{part_id}': {field}={value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(
            msg,
            code="INVALID_GEOMETRY",
            details={
                "part_id": part_id,
                "field": field,
                "value": str(value),
                "reason": reason
            }
        )


class InvalidFieldValueError(ValidationError):
    """Invalid option value"""

    def __init__(self, field: str, value, reason: str = None):
        msg = f"Invalid value for field '{field}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(
            msg,
            code="INVALID_FIELD_VALUE",
            details={"field": field, "value": str(value), "reason": reason}
        )


# ============================================================
# Configuration Errors
# ============================================================

class ConfigurationError(NestingError):
    """Sheet or machine configuration cannot satisfy the job"""
    pass


class NoFeasibleSheetError(ConfigurationError):
    """No sheet can contain the part in any allowed orientation"""

    def __init__(self, part_id: str, part_width: float, part_height: float,
                 sheet_width: float, sheet_length: float):
        super().__init__(
            f"Part '{part_id}' ({part_width:.1f}x{part_height:.1f}mm) does not fit "
            f"sheet {sheet_width:.1f}x{sheet_length:.1f}mm",
            code="NO_FEASIBLE_SHEET",
            details={
                "part_id": part_id,
                "part_width": part_width,
                "part_height": part_height,
                "sheet_width": sheet_width,
                "sheet_length": sheet_length
            }
        )


class ConfigFileError(ConfigurationError):
    """Configuration file missing or malformed"""

    def __init__(self, path: str, reason: str = None):
        super().__init__(
            f"Cannot load config file: {path}" + (f" - {reason}" if reason else ""),
            code="CONFIG_FILE_ERROR",
            details={"path": path, "reason": reason}
        )
