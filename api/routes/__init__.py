"""
HTTP route blueprints.
"""
