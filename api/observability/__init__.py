"""
Tracing and structured logging setup.
"""
