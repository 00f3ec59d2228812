"""Unit tests for the Comment entity."""

from datetime import datetime, timedelta
from uuid import uuid4

from comments.domain.model.comment import Comment, decode_body, encode_body
from comments.domain.value import OwnerId, SiteId, UserId


def _comment(text: str, **kwargs) -> Comment:
    return Comment(
        owner_id=OwnerId(uuid4()), owner_site_id=SiteId(1), comment=text, **kwargs
    )


class TestCommentBody:
    """Tests for emoji and line break handling."""

    def test_emoji_stored_as_shortcode(self):
        """Unicode emoji should be stored in shortcode form."""
        comment = _comment("Nice work 👍")

        assert comment.raw_comment == "Nice work :thumbs_up:"

    def test_emoji_restored_on_read(self):
        """Reading the body should give back the Unicode emoji."""
        comment = _comment("Nice work 👍")

        assert comment.text == "Nice work 👍"

    def test_line_endings_normalised(self):
        """CRLF and CR line breaks should read back as LF."""
        comment = _comment("first\r\nsecond\rthird")

        assert comment.text == "first\nsecond\nthird"

    def test_surrounding_whitespace_trimmed_on_read(self):
        """Leading and trailing whitespace should not survive a read."""
        comment = _comment("  \n hello \r\n ")

        assert comment.text == "hello"

    def test_encode_decode_helpers_round_trip(self):
        """The module helpers should invert each other for emoji text."""
        assert decode_body(encode_body("🎉 launch day 🚀")) == "🎉 launch day 🚀"


class TestCommentIdentity:
    """Tests for guest and registered comment fields."""

    def test_registered_user_url_is_discarded(self):
        """A registered user cannot attach a url."""
        comment = _comment("hi", user_id=UserId(uuid4()), url="https://spam.example")

        assert comment.url is None
        assert not comment.is_guest

    def test_guest_keeps_url(self):
        """Guests may leave a url."""
        comment = _comment("hi", name="Grace", url="https://grace.example")

        assert comment.url == "https://grace.example"
        assert comment.is_guest

    def test_new_until_saved(self):
        """A comment without an id has not been persisted."""
        assert _comment("hi").is_new


class TestGetExcerpt:
    """Tests for get_excerpt."""

    def test_short_body_returned_unchanged(self):
        """A body within the limit should not be altered."""
        comment = _comment("Short and sweet")

        assert comment.get_excerpt() == "Short and sweet"

    def test_long_body_cut_on_word_boundary(self):
        """A 250 character body should shorten to 100 without splitting words."""
        text = ("word " * 50).strip()
        comment = _comment(text)

        excerpt = comment.get_excerpt(100)

        assert len(text) == 249
        assert len(excerpt) <= 100
        assert excerpt.endswith("...")
        assert all(w == "word" for w in excerpt[:-3].split())

    def test_single_long_word_cut_hard(self):
        """A body without whitespace should still be shortened."""
        comment = _comment("x" * 150)

        excerpt = comment.get_excerpt(20)

        assert excerpt == "x" * 17 + "..."

    def test_tiny_limit_never_exceeds_length(self):
        """Limits below the ellipsis width still bound the excerpt."""
        comment = _comment("Hello there")

        assert comment.get_excerpt(2) == "He"
        assert comment.get_excerpt(0) == ""


class TestGetTimeAgo:
    """Tests for get_time_ago."""

    def test_hours(self):
        """A comment made three hours ago."""
        now = datetime(2026, 3, 1, 12, 0, 0)
        comment = _comment("hi", comment_date=now - timedelta(hours=3, minutes=20))

        assert comment.get_time_ago(now) == "3 hours"

    def test_single_unit_is_not_plural(self):
        """One of a unit should read in the singular."""
        now = datetime(2026, 3, 1, 12, 0, 0)
        comment = _comment("hi", comment_date=now - timedelta(days=400))

        assert comment.get_time_ago(now) == "1 year"

    def test_undated_comment(self):
        """A comment that was never dated reads as just now."""
        assert _comment("hi").get_time_ago() == "0 seconds"
