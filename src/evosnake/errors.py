"""
Evosnake Errors Module

Exceptions raised by the evolution engine. None of them is recovered from
inside the package: they signal programmer or configuration mistakes and are
meant to propagate to the top level and abort the run.

Classes:
    EvosnakeError:      Base class for all package-specific errors
    ConfigurationError: Topology, input width or configuration value is invalid
    PersistenceError:   A persisted network is missing, unreadable or malformed
"""

class EvosnakeError(Exception):
    """Base class for all errors raised by evosnake."""

class ConfigurationError(EvosnakeError, ValueError):
    """
    Raised when a network topology, an input vector width or a configuration
    value does not satisfy the invariants the evolutionary loop relies on.
    """

class PersistenceError(EvosnakeError, OSError):
    """
    Raised when a persisted network cannot be read or decoded.
    """
