"""Core models package."""

from .envelope import Envelope, ResourceResponse, UserPage

__all__ = ["Envelope", "ResourceResponse", "UserPage"]
