from pydantic import ValidationError


def validation_message(error: ValidationError) -> str:
    """First pydantic error as a single human readable line."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "__root__")
    message = first.get("msg", "Invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{location}: {message}" if location else message


def clean_form(data) -> dict:
    """Drop blank form values so optional fields fall back to their defaults."""
    return {
        key: value for key, value in (data or {}).items()
        if not (isinstance(value, str) and value.strip() == "")
    }
