from __future__ import annotations

import pytest

from marketmate.database.comments import CommentDatabase


def test_seeded_comments_newest_first():
    db = CommentDatabase()

    comments = db.list_comments("1")

    assert [c.user for c in comments] == ["BuyerXYZ", "User123"]
    assert comments[0].created_at > comments[1].created_at


def test_add_comment_goes_on_top():
    db = CommentDatabase()

    comment = db.add_comment("1", "  Still available?  ")

    assert comment.id == "c3"
    assert comment.user == "CurrentUser"
    assert comment.text == "Still available?"
    assert db.list_comments("1")[0] == comment
    assert len(db.list_comments("2")) == 2


def test_blank_comment_rejected():
    db = CommentDatabase()

    with pytest.raises(ValueError):
        db.add_comment("1", "   ")
    assert len(db.list_comments("1")) == 2


def test_ratings_average():
    db = CommentDatabase()

    assert db.get_rating("1").count == 0
    db.submit_rating("1", 3)
    summary = db.submit_rating("1", 4.5)

    assert summary.count == 2
    assert summary.average == pytest.approx(3.75)
    with pytest.raises(ValueError):
        db.submit_rating("1", 6)
