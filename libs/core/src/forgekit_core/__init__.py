"""Forgekit core - schema definitions and record validation."""

from forgekit_core.validation import ValidationResult, validate

__version__ = "0.1.0"

__all__ = ["ValidationResult", "validate", "__version__"]
