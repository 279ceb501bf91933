"""Business logic services for Snippetbox."""

from snippetbox.services.cascade import CascadeDeleter
from snippetbox.services.favorite import FavoriteService
from snippetbox.services.listing import ListingService, SnippetFilters, SortSpec
from snippetbox.services.pagination import PageRequest, SnippetPage
from snippetbox.services.snippet import SnippetService, SnippetView

__all__ = [
    "CascadeDeleter",
    "FavoriteService",
    "ListingService",
    "PageRequest",
    "SnippetFilters",
    "SnippetPage",
    "SnippetService",
    "SnippetView",
    "SortSpec",
]
