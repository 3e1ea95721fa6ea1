"""Providers implemented by external executables speaking the JSON protocol."""

from .protocol import ErrorEnvelope
from .provider import ExternalProvider, ExternalResource

__all__ = ["ErrorEnvelope", "ExternalProvider", "ExternalResource"]
