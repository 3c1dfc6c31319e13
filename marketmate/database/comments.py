"""Comment and rating storage for product pages"""

from datetime import datetime, timedelta
from typing import Optional

from ..models.comment import Comment, RatingSummary

CURRENT_USER = "CurrentUser"


def _avatar(label: str) -> str:
    return f"https://placehold.co/40x40.png?text={label}"


class CommentDatabase:
    """In-memory comments and ratings"""

    def __init__(self):
        self.comments: dict[str, list[Comment]] = {}
        self.ratings: dict[str, list[float]] = {}

    def _thread(self, product_id: str) -> list[Comment]:
        thread = self.comments.get(product_id)
        if thread is None:
            thread = self._seed(product_id)
            self.comments[product_id] = thread
        return thread

    def _seed(self, product_id: str) -> list[Comment]:
        """Sample discussion shown on every product page"""
        now = datetime.utcnow()
        return [
            Comment(
                id="c2",
                product_id=product_id,
                user="BuyerXYZ",
                avatar=_avatar("BX"),
                text="Interested. Is the price negotiable?",
                created_at=now - timedelta(days=1),
            ),
            Comment(
                id="c1",
                product_id=product_id,
                user="User123",
                avatar=_avatar("U1"),
                text="Great product, exactly as described!",
                created_at=now - timedelta(days=2),
            ),
        ]

    def list_comments(self, product_id: str) -> list[Comment]:
        """Comments for a product, newest first"""
        return list(self._thread(product_id))

    def add_comment(
        self,
        product_id: str,
        text: str,
        user: str = CURRENT_USER,
        avatar: Optional[str] = None,
    ) -> Comment:
        """Post a comment; blank text is rejected"""
        if not text.strip():
            raise ValueError("Comment text must not be empty")

        thread = self._thread(product_id)
        comment = Comment(
            id=f"c{len(thread) + 1}",
            product_id=product_id,
            user=user,
            avatar=avatar or _avatar("ME"),
            text=text.strip(),
            created_at=datetime.utcnow(),
        )
        thread.insert(0, comment)
        return comment

    def submit_rating(self, product_id: str, rating: float) -> RatingSummary:
        """Record a 1-5 star rating"""
        if not 1.0 <= rating <= 5.0:
            raise ValueError("Rating must be between 1 and 5")
        self.ratings.setdefault(product_id, []).append(rating)
        return self.get_rating(product_id)

    def get_rating(self, product_id: str) -> RatingSummary:
        ratings = self.ratings.get(product_id, [])
        if not ratings:
            return RatingSummary(product_id=product_id)
        return RatingSummary(
            product_id=product_id,
            average=round(sum(ratings) / len(ratings), 2),
            count=len(ratings),
        )
