"""
Top-level package for the Activity Registration API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
