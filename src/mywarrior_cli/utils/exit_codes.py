"""
Exit codes for mywarrior.

Scripts wrapping the tracker can use these to tell a lost log record
apart from a bad invocation.
"""

# Success
SUCCESS = 0

# General error (unspecified, including a session whose record could not be logged)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Log store or config file could not be read or written
ERROR_STORAGE = 3


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_STORAGE: "ERROR_STORAGE",
    }
    return code_names.get(code, f"UNKNOWN({code})")
