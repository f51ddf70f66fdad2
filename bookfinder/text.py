"""Text normalization for titles, categories and descriptions."""
import re
from typing import List, Optional, Sequence


# Connector words kept lowercase unless they open the title
LOWERCASE_WORDS = frozenset([
    "a", "an", "the", "and", "but", "or", "for", "nor",
    "on", "at", "to", "from", "by", "in", "of",
])

MAX_CATEGORIES = 3

_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_IFRAME_RE = re.compile(r"<iframe\b[^<]*(?:(?!</iframe>)<[^<]*)*</iframe>", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r'\s*on\w+="[^"]*"')


def normalize_title(text: str) -> str:
    """
    Title-case a string using English capitalization conventions.
    
    Words are split on single spaces. The first word, and every word
    not in LOWERCASE_WORDS, gets an uppercase first letter and a
    lowercase remainder; connector words are lowercased.
    
    Args:
        text: Raw title text
        
    Returns:
        Title-cased text
    """
    words = text.split(" ")
    result = []
    
    for index, word in enumerate(words):
        if index == 0 or word.lower() not in LOWERCASE_WORDS:
            result.append(word[:1].upper() + word[1:].lower())
        else:
            result.append(word.lower())
    
    return " ".join(result)


def process_categories(categories: Optional[Sequence[str]]) -> List[str]:
    """
    Turn raw catalog categories into at most three display labels.
    
    Hierarchical categories such as "Fiction / Literary" keep only
    their top-level segment.
    
    Args:
        categories: Raw category strings, may be None
        
    Returns:
        Unique normalized labels in first-seen order
    """
    if not categories:
        return []
    if isinstance(categories, str):
        categories = [categories]
    
    labels = []
    for category in categories:
        if not isinstance(category, str):
            continue
        if "/" in category:
            category = category.split("/", 1)[0].strip()
        label = normalize_title(category)
        if label not in labels:
            labels.append(label)
    
    return labels[:MAX_CATEGORIES]


def sanitize_html(html: str) -> str:
    """
    Strip script and iframe blocks and inline event handlers.
    
    This is a denylist filter, not an HTML parser. It does not touch
    javascript: URLs, unclosed tags or single-quoted handler values.
    
    Args:
        html: HTML fragment from the catalog
        
    Returns:
        Fragment safe to hand to the view layer
    """
    html = _SCRIPT_RE.sub("", html)
    html = _IFRAME_RE.sub("", html)
    return _EVENT_HANDLER_RE.sub("", html)
