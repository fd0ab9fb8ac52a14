"""
WSGI entry point.

Run with a WSGI server, e.g. ``gunicorn wsgi:app`` from the ``api`` directory.
"""

from app import create_app

app = create_app()
