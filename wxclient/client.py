import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

from .auth.cache import CredentialCache
from .auth.manager import TokenManager
from .config import DEFAULT_API_VERSION, WatsonXConfig
from .models.chat import ChatModel
from .providers.watsonx import WatsonXProvider
from .streaming import DecodeObserver, StreamDecoder
from .transport.http import HTTPTransport


class Client:
    def __init__(self,
                 base_url: Optional[str] = None,
                 api_key: Optional[str] = None,
                 project_id: Optional[str] = None,
                 api_version: Optional[str] = None,
                 stop_token: Optional[str] = None,
                 timeout: Optional[float] = 60.0,
                 refresh_margin: float = 0.0,
                 transport_factory=None,
                 decode_observers: Optional[List[DecodeObserver]] = None,
                 debug: bool = False):

        base_url = base_url or os.getenv("WATSONX_URL")
        if not base_url:
            raise ValueError("No watsonx base URL configured. Pass base_url or set WATSONX_URL.")

        self.config = WatsonXConfig(
            base_url=base_url,
            api_key=api_key or os.getenv("WATSONX_API_KEY"),
            project_id=project_id or os.getenv("WATSONX_PROJECT_ID"),
            api_version=api_version or os.getenv("WATSONX_API_VERSION") or DEFAULT_API_VERSION,
            stop_token=stop_token or os.getenv("WATSONX_STOP_TOKEN"),
            timeout=timeout,
            refresh_margin=refresh_margin,
        )
        self.transport_factory = transport_factory or HTTPTransport
        self.transport = self.transport_factory(base_url=self.config.base_url, timeout=self.config.timeout)
        self.credentials = CredentialCache()
        self.token_manager = TokenManager(self.config, self.transport, self.credentials)
        self.provider = WatsonXProvider(self.config)
        self.decode_observers = decode_observers

        if debug:
            logging.basicConfig(
                level=logging.DEBUG,
                format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            logging.getLogger("wxclient").setLevel(logging.DEBUG)

    def chat(self, model_name: str) -> ChatModel:
        """Return a model bound to this client's transport and credential cache."""
        return ChatModel(
            model_name,
            self.provider,
            self.transport,
            self.token_manager,
            decoder=StreamDecoder(self.decode_observers),
        )

    def close(self):
        self.transport.close()

    async def aclose(self):
        await self.transport.aclose()
