from .cache import CredentialCache
from .manager import TokenManager

__all__ = ["CredentialCache", "TokenManager"]
