"""Custom exceptions for the synthesis context."""

from typing import List, Optional, Sequence


class SchemaValidationError(ValueError):
    """
    Exception raised when a synthesized resume does not conform to the resume schema.

    Attributes:
        message: Error description
        fields: Dotted paths of the failing fields (e.g., 'experience.0.achievements')
        original_error: The underlying pydantic ValidationError
    """

    def __init__(
        self,
        message: str,
        fields: Optional[Sequence[str]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.fields: List[str] = list(fields or [])
        self.original_error = original_error

        parts = [message]

        if self.fields:
            parts.append(f"Failing fields: {', '.join(self.fields)}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class PresetNotFoundError(ValueError):
    """
    Exception raised when a named synthesis preset does not exist.

    Attributes:
        preset_name: The requested preset
        available: Preset names defined in the presets file
    """

    def __init__(self, preset_name: str, available: Sequence[str]):
        self.preset_name = preset_name
        self.available = list(available)
        super().__init__(f"Preset '{preset_name}' not found. Available presets: {self.available}")
