"""HTTP client for the Google Books catalog."""
import requests
from typing import Optional, Dict, Any
from urllib.parse import quote
import logging

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.googleapis.com/books/v1"
MAX_RESULTS = 9


class CatalogClient:
    """Best-effort client for catalog search and volume lookups.
    
    Every failure (network error, timeout, non-2xx status, malformed
    JSON) is logged and reported as ``None``. There are no retries.
    """
    
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        timeout: int = 10
    ):
        """
        Initialize catalog client.
        
        Args:
            base_url: API root, without the ``/volumes`` suffix
            api_key: Optional API key
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        
        # Create session for connection pooling
        self.session = requests.Session()
    
    def search(self, query: str, max_results: int = MAX_RESULTS) -> Optional[Dict[str, Any]]:
        """
        Search for books.
        
        Args:
            query: Search query string
            max_results: Maximum results to request (capped at 9)
            
        Returns:
            API response JSON or None
        """
        if not query or not query.strip():
            return None
        
        params = {
            "q": query,
            "maxResults": min(max_results, MAX_RESULTS)
        }
        return self._get(f"{self.base_url}/volumes", params)
    
    def get_volume(self, book_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a single volume by id.
        
        Args:
            book_id: Catalog volume id
            
        Returns:
            API response JSON or None
        """
        return self._get(f"{self.base_url}/volumes/{quote(book_id, safe='')}", {})
    
    def _get(self, url: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if self.api_key:
            params["key"] = self.api_key
        
        try:
            logger.info(f"Request: {url}")
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {e}")
            return None
        
        if not 200 <= response.status_code < 300:
            logger.warning(f"Status {response.status_code} for {url}")
            return None
        
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Malformed JSON from {url}: {e}")
            return None
    
    def close(self):
        """Close the session."""
        self.session.close()
    
    def __enter__(self):
        """Context manager entry."""
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
