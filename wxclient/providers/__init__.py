from .base import Provider
from .watsonx import WatsonXProvider

__all__ = ["Provider", "WatsonXProvider"]
