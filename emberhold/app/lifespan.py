"""Application lifecycle management for the Emberhold account service."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..config import get_config
from ..database import close_db, get_session_maker, init_db
from ..game.character_factory import CharacterFactory
from ..notifications.mailer import VerificationMailer
from ..persistence.repositories.account_repository import AccountRepository
from ..services.registration_service import RegistrationService
from ..structured_logging.enhanced_logging_config import get_logger, setup_enhanced_logging

logger = get_logger("emberhold.lifespan")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build services on startup and release their resources on shutdown.

    Startup order: logging, database, repository, mailer, registration service.
    """
    config = get_config()
    setup_enhanced_logging(config.to_logging_dict())
    logger.info("Starting Emberhold account service", environment=config.logging.environment)

    await init_db(create_tables=config.database.create_tables)

    repository = AccountRepository(get_session_maker(), character_defaults=config.character)
    mailer = VerificationMailer(config.mail, log_links=config.logging.environment == "local")
    app.state.registration_service = RegistrationService(
        repository,
        mailer,
        config=config.registration,
        character_factory=CharacterFactory(repository, config.character),
    )
    logger.info("Registration service initialized", mail_api_configured=bool(config.mail.api_url))

    try:
        yield
    finally:
        logger.info("Shutting down Emberhold account service")
        await mailer.aclose()
        await close_db()
