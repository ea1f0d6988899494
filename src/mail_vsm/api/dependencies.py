"""
Request dependencies shared by the routers.
"""

from fastapi import Request

from ..classification.service import VSMClassifierService


def get_service(request: Request) -> VSMClassifierService:
    """The classifier service owned by the running app."""
    return request.app.state.classifier
