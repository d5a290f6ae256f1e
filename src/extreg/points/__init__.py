# topmark:header:start
#
#   project      : ExtReg
#   file         : __init__.py
#   file_relpath : src/extreg/points/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Well-known extension points and their payload shapes.

Each module here documents one host extension point (description, validator,
payload dataclasses) and offers the helpers a host uses to consume it.
"""
