"""Vehicle Databases API client for fetching service history by VIN."""

import logging
from typing import Optional

import httpx
from httpx import AsyncClient, RequestError

logger = logging.getLogger(__name__)


class VehicleDatabasesClient:
    """
    Client for the Vehicle Databases service-history API.

    Every call returns a result dict instead of raising so callers can decide
    how to surface failures.
    """

    def __init__(
        self,
        api_key: str,
        api_base_url: str = "https://api.vehicledatabases.com/v1",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Vehicle Databases API key
            api_base_url: Base URL of the API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[AsyncClient] = None

    async def get_client(self) -> AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
            logger.debug("Vehicle Databases client closed")

    async def get_service_history(self, vin: str) -> dict:
        """
        Fetch raw service history for a VIN.

        Returns:
            dict with:
                - success (bool): Whether the request succeeded
                - data (dict): Raw API payload (if success=True)
                - error (str): Error message (if success=False)
                - status_code (int | None): HTTP status code
                - transport_error (bool): True when the API was unreachable
        """
        url = f"{self.api_base_url}/service-history"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "X-API-Key": self.api_key,
        }

        try:
            client = await self.get_client()
            response = await client.post(url, json={"vin": vin}, headers=headers)
        except RequestError as e:
            logger.error("Vehicle Databases request error: vin=%s, error=%s", vin, e)
            return {
                "success": False,
                "error": f"Request error: {e}",
                "status_code": None,
                "transport_error": True,
            }

        if response.is_success:
            try:
                data = response.json()
            except ValueError:
                logger.warning(
                    "Vehicle Databases returned a non-JSON body: vin=%s, status=%s",
                    vin,
                    response.status_code,
                )
                return {
                    "success": False,
                    "error": "API returned an invalid JSON response",
                    "status_code": response.status_code,
                    "transport_error": False,
                }
            logger.debug("Vehicle Databases success: vin=%s", vin)
            return {
                "success": True,
                "data": data,
                "status_code": response.status_code,
            }

        try:
            error_data = response.json() if response.text else {}
        except ValueError:
            error_data = {}
        error_msg = (
            error_data.get("message") if isinstance(error_data, dict) else None
        ) or f"API request failed with status {response.status_code}"

        logger.warning(
            "Vehicle Databases error: vin=%s, status=%s, error=%s",
            vin,
            response.status_code,
            error_msg,
        )
        return {
            "success": False,
            "error": error_msg,
            "status_code": response.status_code,
            "transport_error": False,
        }
