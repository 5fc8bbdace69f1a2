"""
Exit codes for the Toado CLI.

Each error kind maps to its own exit code so scripts wrapping toado can tell
a bad argument from a missing record or a broken database file.
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_STORAGE = 3
ERROR_CONFIG = 4
ERROR_NOT_FOUND = 5

# code -> (name, description)
_REGISTRY = {
    SUCCESS: ("SUCCESS", "Command executed successfully"),
    ERROR_GENERAL: ("ERROR_GENERAL", "A general error occurred"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Invalid arguments or validation error"),
    ERROR_STORAGE: ("ERROR_STORAGE", "Database error - check the database file"),
    ERROR_CONFIG: ("ERROR_CONFIG", "Configuration error - check the config file"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "Task or project not found"),
}


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    if code in _REGISTRY:
        return _REGISTRY[code][0]
    return f"UNKNOWN({code})"


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    if code in _REGISTRY:
        return _REGISTRY[code][1]
    return "Unknown error"
