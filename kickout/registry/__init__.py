"""npm registry operations used by a release."""

from kickout.registry.npm import Registry

__all__ = ["Registry"]
