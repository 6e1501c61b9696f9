"""
Shared dependencies: the process-wide repository handle stored on the app.
"""
from fastapi import Request

from .repositories import Repository


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """Return the repository opened for this application instance."""
    return request.app.state.repository
