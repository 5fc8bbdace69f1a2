"""Helpers for turning Pydantic validation failures into readable text."""

from pydantic import ValidationError


def describe_errors(error: ValidationError) -> str:
    """Join every field error into one ``field: message`` line."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'input'}: {err['msg']}"
        for err in error.errors()
    )
