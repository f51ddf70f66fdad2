"""Async HTTP client for the Google Books catalog."""
import httpx
from typing import Optional, Dict, Any
from urllib.parse import quote
import logging

from bookfinder.client import DEFAULT_BASE_URL, MAX_RESULTS

logger = logging.getLogger(__name__)


class AsyncCatalogClient:
    """Async counterpart of CatalogClient with the same failure rules."""
    
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        timeout: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize async client.
        
        Args:
            base_url: API root, without the ``/volumes`` suffix
            api_key: Optional API key
            timeout: Request timeout
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        
        # Create async HTTP client
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
    
    async def search(self, query: str, max_results: int = MAX_RESULTS) -> Optional[Dict[str, Any]]:
        """
        Search for books asynchronously.
        
        Args:
            query: Search query
            max_results: Max results (capped at 9)
            
        Returns:
            API response or None
        """
        if not query or not query.strip():
            return None
        
        params = {
            "q": query,
            "maxResults": min(max_results, MAX_RESULTS)
        }
        return await self._get(f"{self.base_url}/volumes", params)
    
    async def get_volume(self, book_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a single volume by id."""
        return await self._get(f"{self.base_url}/volumes/{quote(book_id, safe='')}", {})
    
    async def _get(self, url: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if self.api_key:
            params["key"] = self.api_key
        
        try:
            logger.info(f"Async request: {url}")
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Async request failed: {e}")
            return None
        
        if not response.is_success:
            logger.warning(f"Status {response.status_code} for {url}")
            return None
        
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Malformed JSON from {url}: {e}")
            return None
    
    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
    
    async def __aenter__(self):
        """Async context manager entry."""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
