# topmark:header:start
#
#   project      : ExtReg
#   file         : __init__.py
#   file_relpath : tests/plugins/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plugin modules imported by discovery and CLI tests."""
