"""View models for catalog search results and book details."""
from dataclasses import dataclass, field
from typing import Optional, List


UNKNOWN_AUTHOR = "Unknown Author"


@dataclass
class SearchResultItem:
    """One card in the search result grid."""
    id: str
    title: str
    authors: List[str] = field(default_factory=lambda: [UNKNOWN_AUTHOR])
    thumbnail: Optional[str] = None
    isbn: Optional[str] = None
    
    @property
    def authors_str(self) -> str:
        """Format authors as comma-separated string."""
        return ", ".join(self.authors)


@dataclass
class DisplayBook:
    """Normalized book representation for the detail view."""
    id: str
    title: str
    subtitle: Optional[str]
    authors: List[str]
    publish_date: Optional[str]
    categories: List[str]
    cover_url: Optional[str]
    description: Optional[str]
    page_count: Optional[int]
    isbn: Optional[str]
    
    @property
    def authors_str(self) -> str:
        """Format authors as comma-separated string."""
        return ", ".join(self.authors)
    
    @property
    def publish_date_str(self) -> str:
        """Publication date, or "Unknown" when absent."""
        return self.publish_date or "Unknown"
    
    @property
    def categories_str(self) -> str:
        """Format categories as comma-separated string."""
        return ", ".join(self.categories) if self.categories else "None"
