# topmark:header:start
#
#   project      : ExtReg
#   file         : exit_codes.py
#   file_relpath : src/extreg/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the ExtReg CLI.

Values follow the BSD ``sysexits`` convention where one applies, so that
other tooling can interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the ExtReg CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure (e.g. an unknown extension point was requested).
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 64  # EX_USAGE
    CONFIG_ERROR = 78  # EX_CONFIG
