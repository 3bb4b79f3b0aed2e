"""
Application package initializer.

Configuration, storage and logging live in ``core``; queries in
``crud``; the registration rules in ``services``; HTTP routes under
``api/<version>/``.
"""

from .main import app  # noqa: F401
