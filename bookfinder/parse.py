"""Parse and normalize Google Books API responses."""
from typing import Dict, Any, List, Optional, Iterable
import logging

from bookfinder.client import MAX_RESULTS
from bookfinder.models import DisplayBook, SearchResultItem, UNKNOWN_AUTHOR
from bookfinder.text import normalize_title, process_categories, sanitize_html

logger = logging.getLogger(__name__)

ISBN_PREFERENCE = ("ISBN_13", "ISBN_10")


def select_isbn(identifiers: Optional[Iterable[Dict[str, Any]]]) -> Optional[str]:
    """
    Pick the preferred ISBN from a list of industry identifiers.
    
    Args:
        identifiers: ``industryIdentifiers`` entries, may be None
        
    Returns:
        ISBN_13 value if present, else ISBN_10 value, else None
    """
    found = {}
    for identifier in identifiers or []:
        if not isinstance(identifier, dict):
            continue
        id_type = identifier.get("type")
        if id_type in ISBN_PREFERENCE and id_type not in found:
            found[id_type] = identifier.get("identifier")
    
    for id_type in ISBN_PREFERENCE:
        if found.get(id_type):
            return found[id_type]
    return None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _authors(volume_info: Dict[str, Any]) -> List[str]:
    authors = volume_info.get("authors")
    if isinstance(authors, str) and authors:
        return [authors]
    if isinstance(authors, list):
        authors = [a for a in authors if isinstance(a, str) and a]
        if authors:
            return authors
    return [UNKNOWN_AUTHOR]


def _thumbnail(volume_info: Dict[str, Any]) -> Optional[str]:
    image_links = volume_info.get("imageLinks")
    if not isinstance(image_links, dict):
        return None
    return image_links.get("thumbnail") or None


def parse_search_item(item: Dict[str, Any]) -> Optional[SearchResultItem]:
    """
    Parse a single search hit into a result card.
    
    Args:
        item: Single item from Google Books API response
        
    Returns:
        SearchResultItem or None if the item is unusable
    """
    if not isinstance(item, dict):
        logger.warning(f"Skipping non-object search item: {item!r:.80}")
        return None

    volume_info = item.get("volumeInfo")
    book_id = item.get("id")
    if not book_id or not isinstance(volume_info, dict):
        logger.warning(f"Skipping malformed search item: {item!r:.80}")
        return None
    
    return SearchResultItem(
        id=book_id,
        title=_text(volume_info.get("title")),
        authors=_authors(volume_info),
        thumbnail=_thumbnail(volume_info),
        isbn=select_isbn(volume_info.get("industryIdentifiers")),
    )


def dedupe_and_cap(items: Iterable[Dict[str, Any]], limit: int = MAX_RESULTS) -> List[SearchResultItem]:
    """
    Map raw search hits to result cards, dropping repeated titles.
    
    Input order is kept. The first item with a given raw title wins and
    at most ``limit`` cards are returned.
    
    Args:
        items: ``items`` entries from a search response
        limit: Maximum number of cards
        
    Returns:
        List of SearchResultItem objects
    """
    seen_titles = set()
    results = []
    
    for item in items:
        if len(results) >= limit:
            break
        result = parse_search_item(item)
        if result is None or result.title in seen_titles:
            continue
        seen_titles.add(result.title)
        results.append(result)
    
    return results


def parse_search_response(response_json: Optional[Dict[str, Any]]) -> List[SearchResultItem]:
    """
    Parse full search response.
    
    Args:
        response_json: Complete API response JSON, None on fetch failure
        
    Returns:
        List of result cards (empty if no items found)
    """
    if not isinstance(response_json, dict):
        return []
    items = response_json.get("items")
    if not isinstance(items, list):
        return []
    return dedupe_and_cap(items)


def parse_volume(response_json: Optional[Dict[str, Any]], book_id: str) -> Optional[DisplayBook]:
    """
    Parse a volume lookup into the detail view model.
    
    Args:
        response_json: Response of ``GET /volumes/{id}``
        book_id: Requested volume id
        
    Returns:
        DisplayBook or None when the volume was not found
    """
    if not isinstance(response_json, dict):
        return None
    volume_info = response_json.get("volumeInfo")
    if not isinstance(volume_info, dict):
        return None
    
    subtitle = _text(volume_info.get("subtitle"))
    description = _text(volume_info.get("description"))
    
    return DisplayBook(
        id=response_json.get("id") or book_id,
        title=normalize_title(_text(volume_info.get("title"))),
        subtitle=normalize_title(subtitle) if subtitle else None,
        authors=_authors(volume_info),
        publish_date=volume_info.get("publishedDate"),
        categories=process_categories(volume_info.get("categories")),
        cover_url=_thumbnail(volume_info),
        description=sanitize_html(description) if description else None,
        page_count=volume_info.get("pageCount"),
        isbn=select_isbn(volume_info.get("industryIdentifiers")),
    )
