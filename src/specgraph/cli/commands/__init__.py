"""
CLI command modules. Each module exposes one click command.
"""
