"""On-disk records kept between runs."""

from .credential_cache import CredentialCache
from .error_log import ErrorLog

__all__ = ["CredentialCache", "ErrorLog"]
