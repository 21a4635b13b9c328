"""
Structured logging package for the Emberhold account service.

All imports should use explicit paths like
'from emberhold.structured_logging.enhanced_logging_config import get_logger'.
The package is not named 'logging' so it never shadows the standard library module.
"""

__all__: list[str] = []
