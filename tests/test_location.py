"""
Unit tests for comment location labels and date formatting
"""

from datetime import datetime, timedelta, timezone

from review_record_sheet.location import (
    resolve_location, format_date, OVERALL_LOCATION, OVERALL_LOCATION_JA,
)
from review_record_sheet.models import Comment
from conftest import make_comment_payload


class TestResolveLocation:
    """Test cases for resolve_location."""

    def test_inline_comment(self):
        """Test label for a comment attached to a line."""
        comment = Comment.from_dict(make_comment_payload(file_path='src/a.go', position=10))

        assert resolve_location(comment) == 'src/a.go: line 10'

    def test_general_comment(self):
        """Test the overall label for a comment without a location."""
        comment = Comment.from_dict(make_comment_payload())

        assert resolve_location(comment) == OVERALL_LOCATION

    def test_position_without_file_path(self):
        """Test that a stray position still yields the overall label."""
        comment = Comment.from_dict(make_comment_payload(position=42))

        assert resolve_location(comment) == OVERALL_LOCATION

    def test_japanese_labels(self):
        """Test the Japanese rendering of both cases."""
        inline = Comment.from_dict(make_comment_payload(file_path='main.go', position=3))
        general = Comment.from_dict(make_comment_payload())

        assert resolve_location(inline, 'japanese') == 'main.go: 3行目'
        assert resolve_location(general, 'japanese') == OVERALL_LOCATION_JA

    def test_overall_label_is_not_a_path(self):
        """Test that the sentinel does not look like a file: line label."""
        assert ': line ' not in OVERALL_LOCATION


class TestFormatDate:
    """Test cases for format_date."""

    def test_utc_timestamp(self):
        """Test yyyy/mm/dd formatting with zero padding."""
        timestamp = datetime(2023, 1, 5, 9, 0, tzinfo=timezone.utc)

        assert format_date(timestamp) == '2023/01/05'

    def test_keeps_delivered_offset(self):
        """Test that the date is not shifted to another time zone."""
        jst = timezone(timedelta(hours=9))
        timestamp = datetime(2023, 12, 31, 23, 30, tzinfo=jst)

        assert format_date(timestamp) == '2023/12/31'
