"""Shared fixtures and payload builders for the test suite."""

import pytest

from review_record_sheet.config import Config


def make_comment_payload(comment_id=1, content='Looks good', file_path=None, position=None,
                         user_name='Taro Yamada', created='2023-01-05T09:00:00Z'):
    """Build a comment document shaped like the Backlog API response."""
    return {
        'id': comment_id,
        'oldBlobId': None,
        'newBlobId': None,
        'filePath': file_path,
        'position': position,
        'content': content,
        'changeLog': [],
        'createdUser': {
            'id': 7,
            'userId': 'taro',
            'name': user_name,
            'roleType': 1,
            'lang': 'ja',
            'mailAddress': 'taro@example.com',
            'nulabAccount': {
                'nulabId': 'abc',
                'name': user_name,
                'uniqueId': 'taro',
                'iconUrl': 'https://example.com/icon.png',
            },
            'keyword': 'taro',
            'lastLoginTime': '2023-01-04T00:00:00Z',
        },
        'created': created,
        'updated': created,
        'stars': [],
        'notifications': [],
    }


@pytest.fixture
def config():
    """Configuration pointing at a fake Backlog space."""
    return Config(api_key='test_key', space='example.backlog.com')
