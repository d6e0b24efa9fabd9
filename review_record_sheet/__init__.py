"""Backlog Review Record Sheet - export pull request review comments to Excel."""

from .models import Project, Repository, PullRequest, User, ChangeLog, CommentLocation, Comment
from .exceptions import (
    ReviewSheetError, ConfigurationError, RemoteError, DecodeError,
    ChooserError, EmptyListError, ParseError, RangeError, ReportWriteError,
)
from .config import Config, load_config
from .api_client import BacklogAPIClient
from .location import resolve_location, format_date, OVERALL_LOCATION
from .chooser import Chooser
from .report import ReportBuilder, generate_filename
from .cli import ReviewRecordSheetCLI

__all__ = [
    'Project',
    'Repository',
    'PullRequest',
    'User',
    'ChangeLog',
    'CommentLocation',
    'Comment',
    'ReviewSheetError',
    'ConfigurationError',
    'RemoteError',
    'DecodeError',
    'ChooserError',
    'EmptyListError',
    'ParseError',
    'RangeError',
    'ReportWriteError',
    'Config',
    'load_config',
    'BacklogAPIClient',
    'resolve_location',
    'format_date',
    'OVERALL_LOCATION',
    'Chooser',
    'ReportBuilder',
    'generate_filename',
    'ReviewRecordSheetCLI',
]
