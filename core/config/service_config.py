#!/usr/bin/env python3
"""Service configuration for the booking backends

External HTTP endpoints the booking pipeline talks to. The availability,
calendar and catalog collaborators default to the booking API itself and can
be pointed elsewhere independently.
"""
import os
from dataclasses import dataclass


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class ServiceConfig:
    """Booking backend endpoints"""

    # Authoritative write endpoints (reservations, rentals, appointments)
    booking_api_url: str = "http://localhost:5000"

    # Collaborators
    availability_api_url: str = "http://localhost:5000"
    calendar_api_url: str = "http://localhost:5000"
    catalog_api_url: str = "http://localhost:5000"

    # Transport default only; no extra client-side deadline is layered on top
    request_timeout: float = 30.0

    def url_for(self, service_name: str) -> str:
        """Resolve the base URL for a named client"""
        urls = {
            "booking_api": self.booking_api_url,
            "availability": self.availability_api_url,
            "calendar": self.calendar_api_url,
            "catalog": self.catalog_api_url,
        }
        return urls.get(service_name, self.booking_api_url)

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Load service configuration from environment variables"""
        booking_url = os.getenv("BOOKING_API_URL", "http://localhost:5000")
        return cls(
            booking_api_url=booking_url,
            availability_api_url=os.getenv("AVAILABILITY_API_URL") or booking_url,
            calendar_api_url=os.getenv("CALENDAR_API_URL") or booking_url,
            catalog_api_url=os.getenv("CATALOG_API_URL") or booking_url,
            request_timeout=_float(os.getenv("REQUEST_TIMEOUT", ""), 30.0),
        )
