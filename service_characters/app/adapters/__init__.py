"""
Adapters package for the Characters Service.

Contains the HTTP client wrapper for the upstream character API. The adapter
encapsulates:

- Base URL and request shapes
- An explicit request timeout
- Error handling that maps to shared errors

No retries or circuit breaking: failures surface on the same request.
"""

from .character_client import CharacterApiClient

__all__ = ["CharacterApiClient"]
