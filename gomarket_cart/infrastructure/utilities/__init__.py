"""
Shared utilities: error types and constants
"""
