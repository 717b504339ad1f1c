"""Application DTOs."""

from refcache.application.dtos.bootstrap import BootstrapResult, DefinitionFailure

__all__ = ["BootstrapResult", "DefinitionFailure"]
