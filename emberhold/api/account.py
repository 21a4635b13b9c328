"""
Account signup endpoints.

The router stays thin: it reads the form, hands it to RegistrationService and
turns the outcome into a redirect. Registration failures propagate to the
exception handlers, which render them as 400 responses.
"""

import json

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from ..dependencies import RegistrationServiceDep
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.error_logging import create_context_from_request

logger = get_logger(__name__)

account_router = APIRouter(prefix="/account", tags=["account"])

FLASH_COOKIE = "flash"
SIGNUP_TITLE = "Create Account"


@account_router.get("/signup")
async def signup_page() -> dict[str, str]:
    """Data for the signup page."""
    return {"title": SIGNUP_TITLE}


@account_router.post("/signup", status_code=303)
async def signup(request: Request, service: RegistrationServiceDep) -> RedirectResponse:
    """
    Create an account from the submitted signup form.

    Returns:
        303 redirect to the login page with a success flash cookie
    """
    form = await request.form()
    data = dict(form.items())

    context = create_context_from_request(request)
    result = await service.register(data, context=context)

    response = RedirectResponse(url=result.location, status_code=303)
    response.set_cookie(
        FLASH_COOKIE,
        json.dumps(result.flash.model_dump()),
        max_age=60,
        httponly=True,
        samesite="lax",
        path="/",
    )
    logger.info("Signup redirect issued", account_id=result.account_id, location=result.location)
    return response
