"""Credential lookups and resolution."""

from .credential_resolver import CredentialResolver, Lookup, default_lookups

__all__ = ["CredentialResolver", "Lookup", "default_lookups"]
