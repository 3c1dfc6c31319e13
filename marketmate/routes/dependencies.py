"""Request dependencies resolving the stores attached to the app"""

from typing import Optional

from fastapi import Header, Request

from ..database.bag import BagDatabase, BagStore
from ..database.comments import CommentDatabase
from ..database.products import ProductDatabase
from ..database.session import SessionDatabase, SessionStore
from ..services.listings import ListingService
from ..services.notifications import NotificationCenter
from ..services.tagging import TagSuggestionClient

DEFAULT_BAG_ID = "default"
DEFAULT_SESSION_ID = "default"


def get_product_db(request: Request) -> ProductDatabase:
    return request.app.state.product_db


def get_bag_db(request: Request) -> BagDatabase:
    return request.app.state.bag_db


def get_bag(
    request: Request,
    x_bag_id: Optional[str] = Header(None),
) -> BagStore:
    """Bag addressed by the X-Bag-Id header"""
    return get_bag_db(request).get_bag(x_bag_id or DEFAULT_BAG_ID)


def get_comment_db(request: Request) -> CommentDatabase:
    return request.app.state.comment_db


def get_listing_service(request: Request) -> ListingService:
    return request.app.state.listing_service


def get_notifications(request: Request) -> NotificationCenter:
    return request.app.state.notifications


def get_tag_client(request: Request) -> Optional[TagSuggestionClient]:
    return request.app.state.tag_client


def get_session_db(request: Request) -> SessionDatabase:
    return request.app.state.session_db


def get_session(
    request: Request,
    x_session_id: Optional[str] = Header(None),
) -> SessionStore:
    """Session addressed by the X-Session-Id header"""
    return get_session_db(request).get_session(x_session_id or DEFAULT_SESSION_ID)
