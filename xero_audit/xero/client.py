"""
Xero accounting API client
"""
import logging
from typing import Dict, Any, List, Optional
import httpx

from xero_audit.exceptions import XeroAPIError, XeroAuthError, XeroRateLimitError
from xero_audit.models.schemas import PurchaseOrder, XeroConnection

logger = logging.getLogger(__name__)


class XeroClient:
    """
    Thin async client over the Xero api.xro/2.0 endpoints used by the diagnostics
    """

    def __init__(
        self,
        base_url: str = "https://api.xero.com/api.xro/2.0",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.request_log: List[Dict[str, Any]] = []

    def _headers(self, connection: XeroConnection) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {connection.access_token}",
            "Xero-Tenant-Id": connection.tenant_id,
            "Accept": "application/json",
        }

    async def _get(self, connection: XeroConnection, endpoint: str) -> Dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(url, headers=self._headers(connection))

        self.request_log.append({
            "endpoint": endpoint,
            "tenant_id": connection.tenant_id,
            "status_code": response.status_code
        })

        if response.status_code == 401:
            logger.error(f"Xero rejected the access token for tenant {connection.tenant_id}")
            raise XeroAuthError()

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After", "0")
            logger.warning(f"Xero rate limit hit, retry after {retry_after}s")
            raise XeroRateLimitError(int(retry_after) if retry_after.isdigit() else 0)

        if response.is_error:
            logger.error(f"Xero GET /{endpoint} failed: {response.status_code}")
            raise XeroAPIError(response.status_code, response.text[:200])

        return response.json()

    async def fetch_purchase_orders(self, connection: XeroConnection) -> List[PurchaseOrder]:
        data = await self._get(connection, "PurchaseOrders")
        purchase_orders = [
            PurchaseOrder.model_validate(po) for po in data.get("PurchaseOrders") or []
        ]
        logger.info(f"Fetched {len(purchase_orders)} purchase orders from Xero")
        return purchase_orders

    def get_request_log(self) -> List[Dict[str, Any]]:
        return self.request_log

    def clear_log(self):
        self.request_log = []
