"""Display labels for comment locations and dates."""

from datetime import datetime

from .models import Comment

# Label for comments that belong to the whole pull request rather than a line
OVERALL_LOCATION = '(overall)'
OVERALL_LOCATION_JA = '全体'

DATE_FORMAT = '%Y/%m/%d'


def resolve_location(comment: Comment, language: str = 'english') -> str:
    """Return where a comment was made.

    Args:
        comment: The comment to describe
        language: 'english' (default) or 'japanese'

    Returns:
        '{file_path}: line {position}' for inline comments, or the fixed
        overall label for general comments
    """
    location = comment.location
    if language == 'japanese':
        if location is None:
            return OVERALL_LOCATION_JA
        return f"{location.file_path}: {location.position}行目"

    if location is None:
        return OVERALL_LOCATION
    return f"{location.file_path}: line {location.position}"


def format_date(timestamp: datetime) -> str:
    """Format a timestamp as yyyy/mm/dd in the offset it was delivered with."""
    return timestamp.strftime(DATE_FORMAT)
