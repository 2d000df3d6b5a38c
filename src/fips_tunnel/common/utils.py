"""Utility functions for FIPS tunnel bootstrap."""

# Port range constants
MIN_PORT = 1
MAX_PORT = 65535


def validate_port(port: str, port_name: str = "Port") -> str:
    """Validate a port given as a string.

    Args:
        port: Port number as text (e.g. "443")
        port_name: Name of the port for error messages

    Returns:
        Stripped port string

    Raises:
        ValueError: If port is not numeric or not in valid range (1-65535)
    """
    value = port.strip() if isinstance(port, str) else ""
    if not value.isdigit() or not (MIN_PORT <= int(value) <= MAX_PORT):
        raise ValueError(f"{port_name} must be between {MIN_PORT} and {MAX_PORT}")
    return value


def validate_directive_value(value: str, field_name: str) -> str:
    """Validate a value that will be written into a single config directive.

    Args:
        value: Directive value to validate
        field_name: Name of the field for error messages

    Returns:
        Stripped value

    Raises:
        ValueError: If value is empty or spans more than one line
    """
    if not value or not value.strip():
        raise ValueError(f"{field_name} cannot be empty")
    if "\n" in value or "\r" in value:
        raise ValueError(f"{field_name} cannot contain line breaks")
    return value.strip()
