"""Backlog API client for listing projects, repositories, pull requests and comments."""

import logging
from typing import Callable, Dict, List, Tuple, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import Config
from .exceptions import DecodeError, RemoteError
from .models import Comment, Project, PullRequest, Repository

T = TypeVar('T')

REQUEST_TIMEOUT = 30  # seconds

# Open, In review, Merged. Closed-without-merge (4) is left out.
PULL_REQUEST_STATUS_IDS = (1, 2, 3)

# Backlog's maximum page size for comments; no further pages are requested
COMMENT_COUNT = 100


class BacklogAPIClient:
    """Handles Backlog API requests and decodes the responses into models."""

    def __init__(self, config: Config, session: requests.Session = None):
        """Initialize the Backlog API client.

        Args:
            config: Loaded configuration holding the API key and space
            session: Optional pre-built session (mainly for tests)
        """
        self.config = config
        self.base_url = config.base_url
        self.session = session or requests.Session()

        if session is None:
            # Transient failures are surfaced to the operator, never retried
            adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
            self.session.mount('https://', adapter)
            self.session.mount('http://', adapter)

        self.session.headers.update({'Accept': 'application/json'})
        logging.info(f"Initialized Backlog API client for {config.space}")

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _get(self, path: str, what: str, params: List[Tuple[str, object]] = None):
        """Make a single GET request and return the parsed JSON body.

        Args:
            path: Endpoint path below the API base URL
            what: Short description used in error messages, e.g. 'projects'
            params: Extra query parameters; list of pairs so keys may repeat

        Returns:
            The decoded JSON document

        Raises:
            RemoteError: On transport failure or a non-success status
            DecodeError: If the body is not valid JSON
        """
        url = f"{self.base_url}{path}"
        query = [('apiKey', self.config.api_key)] + list(params or [])

        logging.debug(f"GET {url} params={params or []}")
        try:
            response = self.session.get(url, params=query, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            # The exception text carries the full request URL, query string included
            detail = str(e).replace(self.config.api_key, '***')
            raise RemoteError(f"error getting {what}: {type(e).__name__}: {detail}") from None

        if not response.ok:
            body = response.text
            logging.error(f"Backlog API returned {response.status_code} for {what}")
            raise RemoteError(
                f"error getting {what}: {body}, status code: {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        logging.debug(f"Response body for {what}: {response.text}")
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"error decoding {what}: {e}") from e

    def _get_list(self, path: str, what: str, decode: Callable[[Dict], T],
                  params: List[Tuple[str, object]] = None) -> List[T]:
        data = self._get(path, what, params)
        if not isinstance(data, list):
            raise DecodeError(f"error decoding {what}: expected a JSON array, got {type(data).__name__}")

        try:
            items = [decode(item) for item in data]
        except DecodeError as e:
            raise DecodeError(f"error decoding {what}: {e}") from e

        logging.debug(f"Fetched {len(items)} {what}")
        return items

    def get_projects(self) -> List[Project]:
        """List every project visible to the API key."""
        return self._get_list('/projects', 'projects', Project.from_dict)

    def get_repositories(self, project_id: int) -> List[Repository]:
        """List the Git repositories of a project.

        Args:
            project_id: Backlog project id

        Returns:
            Repositories in the order the server returns them
        """
        return self._get_list(
            f"/projects/{project_id}/git/repositories",
            'repositories',
            Repository.from_dict,
        )

    def get_pull_requests(self, project_id: int, repository_id: int) -> List[PullRequest]:
        """List the open, in-review and merged pull requests of a repository.

        Args:
            project_id: Backlog project id
            repository_id: Repository id within the project

        Returns:
            Pull requests in the order the server returns them
        """
        params = [('statusId[]', status_id) for status_id in PULL_REQUEST_STATUS_IDS]
        return self._get_list(
            f"/projects/{project_id}/git/repositories/{repository_id}/pullRequests",
            'pull requests',
            PullRequest.from_dict,
            params,
        )

    def get_comments(self, project_id: int, repository_id: int, pull_request_number: int) -> List[Comment]:
        """Fetch the comments of a pull request.

        Only the first COMMENT_COUNT comments are returned; longer
        discussions are truncated.

        Args:
            project_id: Backlog project id
            repository_id: Repository id within the project
            pull_request_number: The pull request's number (not its id)

        Returns:
            Comments in the order the server returns them
        """
        comments = self._get_list(
            f"/projects/{project_id}/git/repositories/{repository_id}"
            f"/pullRequests/{pull_request_number}/comments",
            'comments',
            Comment.from_dict,
            [('count', COMMENT_COUNT)],
        )
        if len(comments) >= COMMENT_COUNT:
            logging.warning(
                f"Pull request #{pull_request_number} returned {len(comments)} comments; "
                f"only the first {COMMENT_COUNT} are fetched, the report may be incomplete"
            )
        return comments
