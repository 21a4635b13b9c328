"""Pydantic schemas for the Emberhold account service."""
