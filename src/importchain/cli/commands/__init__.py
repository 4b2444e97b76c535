"""
CLI Commands for importchain.

Each command is implemented in its own module.
"""
