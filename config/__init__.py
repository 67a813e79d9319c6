"""Configuration module for the documentation service.

Provides environment-driven settings for the server and the client store.
"""

from .settings import ServerSettings, ClientSettings

__all__ = [
    'ServerSettings',
    'ClientSettings'
]
