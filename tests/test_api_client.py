"""
Unit tests for the Backlog API client
"""

import pytest
import requests
from unittest.mock import Mock

from review_record_sheet.api_client import BacklogAPIClient, REQUEST_TIMEOUT
from review_record_sheet.exceptions import DecodeError, RemoteError
from review_record_sheet.models import Comment, Project, PullRequest, Repository
from conftest import make_comment_payload

BASE_URL = 'https://example.backlog.com/api/v2'


def make_response(status_code=200, json_data=None, text=''):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def client(config):
    """Create client with mocked session."""
    return BacklogAPIClient(config, session=Mock())


class TestRequests:
    """Test cases for URLs and query parameters."""

    def test_get_projects(self, client):
        """Test that projects are decoded in server order."""
        client.session.get.return_value = make_response(json_data=[
            {'id': 2, 'name': 'Beta'},
            {'id': 1, 'name': 'Alpha'},
        ])

        projects = client.get_projects()

        assert projects == [Project(id=2, name='Beta'), Project(id=1, name='Alpha')]
        client.session.get.assert_called_once_with(
            f'{BASE_URL}/projects',
            params=[('apiKey', 'test_key')],
            timeout=REQUEST_TIMEOUT,
        )

    def test_get_repositories(self, client):
        """Test the repositories endpoint of a project."""
        client.session.get.return_value = make_response(json_data=[{'id': 5, 'name': 'backend'}])

        repositories = client.get_repositories(10)

        assert repositories == [Repository(id=5, name='backend')]
        url = client.session.get.call_args[0][0]
        assert url == f'{BASE_URL}/projects/10/git/repositories'

    def test_get_pull_requests_filters_status(self, client):
        """Test that open, in-review and merged statuses are requested."""
        client.session.get.return_value = make_response(json_data=[
            {'id': 900, 'number': 3, 'summary': 'Fix bug'},
        ])

        pull_requests = client.get_pull_requests(10, 5)

        assert pull_requests == [PullRequest(id=900, number=3, summary='Fix bug')]
        args, kwargs = client.session.get.call_args
        assert args[0] == f'{BASE_URL}/projects/10/git/repositories/5/pullRequests'
        assert kwargs['params'] == [
            ('apiKey', 'test_key'),
            ('statusId[]', 1),
            ('statusId[]', 2),
            ('statusId[]', 3),
        ]

    def test_get_comments_uses_number_and_count(self, client):
        """Test that comments are requested by pull request number with count=100."""
        client.session.get.return_value = make_response(json_data=[
            make_comment_payload(comment_id=1, file_path='src/a.go', position=10),
            make_comment_payload(comment_id=2),
        ])

        comments = client.get_comments(10, 5, 3)

        assert [c.id for c in comments] == [1, 2]
        assert all(isinstance(c, Comment) for c in comments)
        args, kwargs = client.session.get.call_args
        assert args[0] == f'{BASE_URL}/projects/10/git/repositories/5/pullRequests/3/comments'
        assert ('count', 100) in kwargs['params']

    def test_full_page_of_comments_warns(self, client, caplog):
        """Test that a full page logs a truncation warning but still returns it."""
        client.session.get.return_value = make_response(json_data=[
            make_comment_payload(comment_id=i) for i in range(100)
        ])

        comments = client.get_comments(10, 5, 3)

        assert len(comments) == 100
        assert 'may be incomplete' in caplog.text

    def test_api_key_not_logged(self, client, caplog):
        """Test that debug logging never contains the API key."""
        client.session.get.return_value = make_response(json_data=[])

        with caplog.at_level('DEBUG'):
            client.get_projects()

        assert 'test_key' not in caplog.text


class TestErrorHandling:
    """Test cases for RemoteError and DecodeError."""

    def test_non_success_status(self, client):
        """Test that status and body are both reported."""
        client.session.get.return_value = make_response(status_code=429, text='rate limited')

        with pytest.raises(RemoteError) as exc_info:
            client.get_comments(10, 5, 3)

        assert 'rate limited' in str(exc_info.value)
        assert '429' in str(exc_info.value)
        assert exc_info.value.status_code == 429
        assert exc_info.value.body == 'rate limited'

    def test_404_error(self, client):
        """Test handling of 404 errors."""
        client.session.get.return_value = make_response(status_code=404, text='{"errors": []}')

        with pytest.raises(RemoteError, match='status code: 404'):
            client.get_projects()

    def test_network_error(self, client):
        """Test that transport faults become RemoteError."""
        client.session.get.side_effect = requests.exceptions.ConnectionError('Network error')

        with pytest.raises(RemoteError, match='Network error') as exc_info:
            client.get_repositories(10)

        assert exc_info.value.status_code is None

    def test_transport_error_hides_api_key(self, client):
        """Test that the API key in the failing URL is not repeated in the error."""
        client.session.get.side_effect = requests.exceptions.ConnectionError(
            "HTTPSConnectionPool(host='example.backlog.com'): Max retries exceeded with url: "
            "/api/v2/projects?apiKey=test_key"
        )

        with pytest.raises(RemoteError) as exc_info:
            client.get_projects()

        message = str(exc_info.value)
        assert 'test_key' not in message
        assert 'apiKey=***' in message
        assert 'ConnectionError' in message
        assert exc_info.value.__cause__ is None

    def test_timeout(self, client):
        """Test that a timeout is reported like any other transport fault."""
        client.session.get.side_effect = requests.exceptions.Timeout('timed out')

        with pytest.raises(RemoteError):
            client.get_pull_requests(10, 5)

    def test_invalid_json(self, client):
        """Test that an unparsable body raises DecodeError."""
        client.session.get.return_value = make_response(json_data=ValueError('Expecting value'))

        with pytest.raises(DecodeError, match='error decoding projects'):
            client.get_projects()

    def test_not_a_list(self, client):
        """Test that an object where an array is expected raises DecodeError."""
        client.session.get.return_value = make_response(json_data={'id': 1, 'name': 'Alpha'})

        with pytest.raises(DecodeError, match='expected a JSON array'):
            client.get_projects()

    def test_malformed_element(self, client):
        """Test that one bad element fails the whole call."""
        client.session.get.return_value = make_response(json_data=[
            {'id': 1, 'name': 'Alpha'},
            {'id': 2},
        ])

        with pytest.raises(DecodeError, match="missing required field 'name'"):
            client.get_projects()


class TestSession:
    """Test cases for session lifecycle."""

    def test_default_session_has_no_retries(self, config):
        """Test that the built-in session does not retry."""
        client = BacklogAPIClient(config)

        adapter = client.session.get_adapter(BASE_URL)
        assert adapter.max_retries.total == 0
        client.close()

    def test_context_manager_closes_session(self, client):
        """Test that leaving the with block closes the session."""
        with client:
            pass

        client.session.close.assert_called_once()
