"""Data models for Backlog projects, repositories, pull requests and comments.

Each entity decodes itself from the JSON document returned by the Backlog API
through an explicit ``from_dict`` schema: required fields must be present with
the right JSON type, optional fields may be missing or null. Anything else
raises ``DecodeError``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import DecodeError


def _require(data: Dict, key: str, expected: Tuple[type, ...], entity: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"{entity}: expected a JSON object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise DecodeError(f"{entity}: missing required field '{key}'")
    value = data[key]
    # bool is an int subclass; JSON true/false must not pass as an id
    if isinstance(value, bool) and bool not in expected:
        raise DecodeError(f"{entity}: field '{key}' has type bool")
    if not isinstance(value, expected):
        raise DecodeError(f"{entity}: field '{key}' has type {type(value).__name__}")
    return value


def _optional(data: Dict, key: str, expected: Tuple[type, ...], entity: str) -> Any:
    if isinstance(data, dict) and data.get(key) is None:
        return None
    return _require(data, key, expected, entity)


def _timestamp(data: Dict, key: str, entity: str) -> datetime:
    raw = _require(data, key, (str,), entity)
    try:
        # fromisoformat() only accepts a trailing 'Z' from Python 3.11 on
        return datetime.fromisoformat(raw.replace('Z', '+00:00'))
    except ValueError:
        raise DecodeError(f"{entity}: field '{key}' is not an ISO-8601 timestamp: {raw!r}")


@dataclass(frozen=True)
class Project:
    """A Backlog project."""
    id: int
    name: str

    @property
    def display_name(self) -> str:
        return self.name

    @classmethod
    def from_dict(cls, data: Dict) -> 'Project':
        return cls(
            id=_require(data, 'id', (int,), 'Project'),
            name=_require(data, 'name', (str,), 'Project'),
        )


@dataclass(frozen=True)
class Repository:
    """A Git repository hosted in a Backlog project."""
    id: int
    name: str

    @property
    def display_name(self) -> str:
        return self.name

    @classmethod
    def from_dict(cls, data: Dict) -> 'Repository':
        return cls(
            id=_require(data, 'id', (int,), 'Repository'),
            name=_require(data, 'name', (str,), 'Repository'),
        )


@dataclass(frozen=True)
class PullRequest:
    """A pull request; ``number`` is the sequence number shown to people, not ``id``."""
    id: int
    number: int
    summary: str

    @property
    def display_name(self) -> str:
        return self.summary

    @classmethod
    def from_dict(cls, data: Dict) -> 'PullRequest':
        return cls(
            id=_require(data, 'id', (int,), 'PullRequest'),
            number=_require(data, 'number', (int,), 'PullRequest'),
            summary=_require(data, 'summary', (str,), 'PullRequest'),
        )


@dataclass(frozen=True)
class NulabAccount:
    nulab_id: Optional[str] = None
    name: Optional[str] = None
    unique_id: Optional[str] = None
    icon_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'NulabAccount':
        return cls(
            nulab_id=_optional(data, 'nulabId', (str,), 'NulabAccount'),
            name=_optional(data, 'name', (str,), 'NulabAccount'),
            unique_id=_optional(data, 'uniqueId', (str,), 'NulabAccount'),
            icon_url=_optional(data, 'iconUrl', (str,), 'NulabAccount'),
        )


@dataclass(frozen=True)
class User:
    """A Backlog user. Only ``id`` and ``name`` are used by the report."""
    id: int
    name: str
    user_id: Optional[str] = None
    role_type: Optional[int] = None
    lang: Optional[str] = None
    mail_address: Optional[str] = None
    nulab_account: Optional[NulabAccount] = None
    keyword: Optional[str] = None
    last_login_time: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'User':
        nulab_account = _optional(data, 'nulabAccount', (dict,), 'User')
        return cls(
            id=_require(data, 'id', (int,), 'User'),
            name=_require(data, 'name', (str,), 'User'),
            user_id=_optional(data, 'userId', (str,), 'User'),
            role_type=_optional(data, 'roleType', (int,), 'User'),
            lang=_optional(data, 'lang', (str,), 'User'),
            mail_address=_optional(data, 'mailAddress', (str,), 'User'),
            nulab_account=NulabAccount.from_dict(nulab_account) if nulab_account else None,
            keyword=_optional(data, 'keyword', (str,), 'User'),
            last_login_time=_optional(data, 'lastLoginTime', (str,), 'User'),
        )


@dataclass(frozen=True)
class ChangeLog:
    """One change-log entry of a comment. Carried through, never interpreted."""
    field: str
    original_value: Optional[str] = None
    new_value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'ChangeLog':
        return cls(
            field=_require(data, 'field', (str,), 'ChangeLog'),
            original_value=_optional(data, 'originalValue', (str,), 'ChangeLog'),
            new_value=_optional(data, 'newValue', (str,), 'ChangeLog'),
        )


@dataclass(frozen=True)
class CommentLocation:
    """File and line an inline comment is attached to. Both parts always present."""
    file_path: str
    position: int


@dataclass(frozen=True)
class Comment:
    """A pull request comment.

    ``location`` is None for general comments that apply to the whole pull
    request. An API payload carrying only one of ``filePath``/``position``
    is treated as a general comment.
    """
    id: int
    content: str
    created_user: User
    created: datetime
    updated: datetime
    location: Optional[CommentLocation] = None
    change_log: List[ChangeLog] = field(default_factory=list)
    old_blob_id: Optional[str] = None
    new_blob_id: Optional[str] = None
    stars: List[Any] = field(default_factory=list)
    notifications: List[Any] = field(default_factory=list)

    @property
    def file_path(self) -> Optional[str]:
        return self.location.file_path if self.location else None

    @property
    def position(self) -> Optional[int]:
        return self.location.position if self.location else None

    @classmethod
    def from_dict(cls, data: Dict) -> 'Comment':
        file_path = _optional(data, 'filePath', (str,), 'Comment')
        position = _optional(data, 'position', (int,), 'Comment')
        location = None
        if file_path is not None and position is not None:
            location = CommentLocation(file_path=file_path, position=position)

        change_log = _optional(data, 'changeLog', (list,), 'Comment') or []

        return cls(
            id=_require(data, 'id', (int,), 'Comment'),
            # Backlog sends an empty string for comments that only changed metadata
            content=_optional(data, 'content', (str,), 'Comment') or '',
            created_user=User.from_dict(_require(data, 'createdUser', (dict,), 'Comment')),
            created=_timestamp(data, 'created', 'Comment'),
            updated=_timestamp(data, 'updated', 'Comment'),
            location=location,
            change_log=[ChangeLog.from_dict(entry) for entry in change_log],
            old_blob_id=_optional(data, 'oldBlobId', (str,), 'Comment'),
            new_blob_id=_optional(data, 'newBlobId', (str,), 'Comment'),
            stars=_optional(data, 'stars', (list,), 'Comment') or [],
            notifications=_optional(data, 'notifications', (list,), 'Comment') or [],
        )
