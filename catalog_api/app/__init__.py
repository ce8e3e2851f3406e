"""
Application package initializer.

The project is split into a few small pieces: ``core`` holds
configuration, persistence, security and error mapping; ``schemas``
holds the Pydantic request/response models; ``services`` holds the
business rules for each resource; and ``api`` exposes the HTTP
routes.
"""

from .main import app  # noqa: F401
