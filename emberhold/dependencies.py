"""
Dependency injection providers for the Emberhold HTTP surface.

Services are built once in the application lifespan and stored on
app.state; routes receive them through these providers.
"""

from typing import Annotated

from fastapi import Depends, Request

from .services.registration_service import RegistrationService


def get_registration_service(request: Request) -> RegistrationService:
    """
    Get the registration service from application state.

    Raises:
        RuntimeError: If the lifespan did not initialize the service
    """
    service = getattr(request.app.state, "registration_service", None)
    if service is None:
        raise RuntimeError("RegistrationService not found in app.state - ensure it is initialized in lifespan")
    return service


RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
