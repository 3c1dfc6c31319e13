# Service modules

from .notifications import Notifier, NotificationCenter
from .quantity import ValidQuantity, InvalidQuantity, parse_quantity
from .listings import ListingService, ListingError
from .tagging import TagSuggestionClient, TagSuggestionError

__all__ = [
    "Notifier",
    "NotificationCenter",
    "ValidQuantity",
    "InvalidQuantity",
    "parse_quantity",
    "ListingService",
    "ListingError",
    "TagSuggestionClient",
    "TagSuggestionError",
]
