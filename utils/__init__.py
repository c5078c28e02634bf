"""
Utility package: exceptions, error handling decorators, file I/O helpers and constants.
"""
