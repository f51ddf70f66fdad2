"""View controllers owning the state of the search and detail views.

Each fetch is tagged with a request token. Only the response carrying
the most recent token is applied, so a slow response to an earlier
search cannot overwrite the results of a later one.
"""
from typing import Any, Dict, List, Optional
import itertools
import logging

from bookfinder.models import DisplayBook, SearchResultItem
from bookfinder.parse import parse_search_response, parse_volume

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No books found. Try a different search term."
NOT_FOUND_MESSAGE = "Book not found"


class SearchView:
    """State of the search list view.
    
    ``client`` is a CatalogClient for ``search`` or an
    AsyncCatalogClient for ``search_async``.
    """
    
    def __init__(self, client=None):
        self.client = client
        self._tokens = itertools.count(1)
        self.reset()
    
    def reset(self):
        """Return to the initial, never-searched state."""
        self.query = ""
        self.results: List[SearchResultItem] = []
        self.loading = False
        self.has_searched = False
        self._latest: Optional[int] = None
    
    def begin(self, query: str) -> Optional[int]:
        """
        Start a search and hand out its request token.
        
        Args:
            query: Search text
            
        Returns:
            Token for ``complete``, or None for a blank query
        """
        if not query or not query.strip():
            return None
        
        self.query = query
        self.loading = True
        self.has_searched = True
        self._latest = next(self._tokens)
        return self._latest
    
    def complete(self, token: int, response: Optional[Dict[str, Any]]) -> bool:
        """
        Apply a search response if it belongs to the latest search.
        
        Args:
            token: Token returned by ``begin``
            response: Raw API response, None on failure
            
        Returns:
            True if the response was applied
        """
        if token != self._latest:
            logger.debug(f"Dropping stale search response (token {token}, latest {self._latest})")
            return False
        
        self.results = parse_search_response(response)
        self.loading = False
        logger.info(f"Search '{self.query}' returned {len(self.results)} books")
        return True
    
    def search(self, query: str) -> List[SearchResultItem]:
        """Run a search with a synchronous client."""
        token = self.begin(query)
        if token is None:
            return self.results
        self.complete(token, self.client.search(query))
        return self.results
    
    async def search_async(self, query: str) -> List[SearchResultItem]:
        """Run a search with an async client."""
        token = self.begin(query)
        if token is None:
            return self.results
        response = await self.client.search(query)
        self.complete(token, response)
        return self.results
    
    @property
    def message(self) -> Optional[str]:
        """No-results text once a finished search came back empty."""
        if self.has_searched and not self.loading and not self.results:
            return NO_RESULTS_MESSAGE
        return None


class DetailView:
    """State of the book detail view."""
    
    def __init__(self, client=None):
        self.client = client
        self._tokens = itertools.count(1)
        self.reset()
    
    def reset(self):
        """Forget the current book."""
        self.book_id: Optional[str] = None
        self.book: Optional[DisplayBook] = None
        self.loading = False
        self._loaded = False
        self._latest: Optional[int] = None
    
    def begin(self, book_id: str) -> int:
        self.book_id = book_id
        self.book = None
        self.loading = True
        self._loaded = False
        self._latest = next(self._tokens)
        return self._latest
    
    def complete(self, token: int, response: Optional[Dict[str, Any]]) -> bool:
        """
        Apply a volume response if it belongs to the latest lookup.
        
        Args:
            token: Token returned by ``begin``
            response: Raw API response, None on failure
            
        Returns:
            True if the response was applied
        """
        if token != self._latest:
            logger.debug(f"Dropping stale volume response (token {token}, latest {self._latest})")
            return False
        
        self.book = parse_volume(response, self.book_id)
        self.loading = False
        self._loaded = True
        if self.book is None:
            logger.warning(f"Volume not found: {self.book_id}")
        return True
    
    def load(self, book_id: str) -> Optional[DisplayBook]:
        """Load a volume with a synchronous client."""
        token = self.begin(book_id)
        self.complete(token, self.client.get_volume(book_id))
        return self.book
    
    async def load_async(self, book_id: str) -> Optional[DisplayBook]:
        """Load a volume with an async client."""
        token = self.begin(book_id)
        response = await self.client.get_volume(book_id)
        self.complete(token, response)
        return self.book
    
    @property
    def not_found(self) -> bool:
        """True once a lookup finished without a book."""
        return self._loaded and self.book is None
