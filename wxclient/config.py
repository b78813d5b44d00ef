from typing import Optional
from pydantic import BaseModel, field_validator

IAM_TOKEN_URL = "https://iam.cloud.ibm.com/identity/token"
IAM_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"
CLOUD_DOMAIN = "cloud.ibm.com"
DEFAULT_API_VERSION = "2023-05-29"


class WatsonXConfig(BaseModel):
    """Connection settings for a watsonx.ai deployment."""
    base_url: str
    api_key: Optional[str] = None
    project_id: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    stop_token: Optional[str] = None
    timeout: Optional[float] = 60.0
    refresh_margin: float = 0.0

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def is_cloud(self) -> bool:
        """True for IBM Cloud (token exchange), False for on-prem (ZenApiKey)."""
        return CLOUD_DOMAIN in self.base_url
