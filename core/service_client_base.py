"""
Base Service Client for Booking Backends

Base class for every HTTP collaborator client (availability, booking API,
calendar, catalog).
"""

import httpx
import logging
from typing import Optional, Dict, Any
from abc import ABC

from core.config import ServiceConfig, get_settings

logger = logging.getLogger(__name__)


class BaseServiceClient(ABC):
    """
    Base class for booking service clients

    Handles:
    1. Base URL resolution from ServiceConfig
    2. HTTP client lifecycle
    3. Default headers and timeout

    Usage:
        class AvailabilityClient(BaseServiceClient):
            service_name = "availability"

            async def check(self, ...):
                response = await self.post("/api/availability/check", json=payload)
                return response.json()
    """

    # Subclasses must define this
    service_name: str = None  # e.g. "availability"

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[ServiceConfig] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize service client

        Args:
            base_url: Service base URL (defaults to the configured URL)
            config: Service configuration (defaults to global settings)
            timeout: Request timeout in seconds (defaults to config)
            transport: Optional httpx transport, used to inject test transports
        """
        if not self.service_name:
            raise ValueError(f"{self.__class__.__name__} must define 'service_name'")

        config = config or get_settings().services

        if base_url:
            self.base_url = base_url.rstrip('/')
        else:
            self.base_url = config.url_for(self.service_name).rstrip('/')

        self.client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.request_timeout,
            headers=self._build_default_headers(),
            transport=transport,
        )

        logger.debug(f"Initialized {self.service_name} client: {self.base_url}")

    def _build_default_headers(self) -> Dict[str, str]:
        """Build default request headers"""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"booking-client/{self.service_name}",
        }

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
        logger.debug(f"Closed {self.service_name} client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================
    # HTTP helpers
    # ========================================

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """GET request"""
        url = f"{self.base_url}{path}"
        return await self.client.get(url, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """POST request"""
        url = f"{self.base_url}{path}"
        return await self.client.post(url, json=json, headers=headers)

    async def put(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """PUT request"""
        url = f"{self.base_url}{path}"
        return await self.client.put(url, json=json, headers=headers)

    @staticmethod
    def error_message(response: httpx.Response, default: str) -> str:
        """Extract the server's human readable message, if any"""
        try:
            body = response.json()
        except ValueError:
            return default
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail") or body.get("error")
            if isinstance(message, str) and message.strip():
                return message
        return default
