"""Spreadsheet report of pull request comments."""

import logging
import os
from datetime import datetime
from typing import Dict, List

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment

from .exceptions import ReportWriteError
from .location import format_date, resolve_location
from .models import Comment

SHEET_NAME = 'Comments'
FILE_EXTENSION = '.xlsx'

# Column letter -> width, in header order
COLUMN_WIDTHS = {'A': 30, 'B': 20, 'C': 15, 'D': 100}

# Excel refuses longer cell text
MAX_CELL_LENGTH = 32767


def _get_headers(language: str) -> List[str]:
    """Get the header row for the specified language."""
    if language == 'japanese':
        return ['コメントがつけられた場所', 'ユーザー名', '日付', 'コメント内容']
    else:  # english (default)
        return ['Location', 'User', 'Date', 'Comment']


def generate_filename(project_name: str, repository_name: str, pull_request_summary: str,
                      run_date: datetime) -> str:
    """Build '{project}_{repository}_{summary}_{yyyyMMdd}.xlsx'.

    Names are used verbatim; characters the filesystem rejects are not replaced.
    """
    return (f"{project_name}_{repository_name}_{pull_request_summary}_"
            f"{run_date.strftime('%Y%m%d')}{FILE_EXTENSION}")


class ReportBuilder:
    """Builds and saves the comment sheet for one pull request."""

    def __init__(self, language: str = 'english', output_dir: str = None):
        """Initialize the report builder.

        Args:
            language: Language of headers and location labels ('english' or 'japanese')
            output_dir: Directory to write into (defaults to the current directory)
        """
        self.language = language
        self.output_dir = output_dir

    def comment_row(self, comment: Comment) -> List[str]:
        """Render one comment as [location, author, date, content]."""
        row = [
            resolve_location(comment, self.language),
            comment.created_user.name,
            format_date(comment.created),
            comment.content,
        ]
        return [self._cell_text(value, comment) for value in row]

    @staticmethod
    def _cell_text(value: str, comment: Comment) -> str:
        """Drop control characters XML cannot hold and cap the length Excel accepts."""
        value = ILLEGAL_CHARACTERS_RE.sub('', value)
        if len(value) > MAX_CELL_LENGTH:
            logging.warning(
                f"Comment {comment.id} has {len(value)} characters; "
                f"truncating to {MAX_CELL_LENGTH} for the spreadsheet"
            )
            value = value[:MAX_CELL_LENGTH]
        return value

    def build_workbook(self, comments: List[Comment]) -> Workbook:
        """Create a single-sheet workbook with a header row and one row per comment."""
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_NAME

        sheet.append(_get_headers(self.language))
        for comment in comments:
            sheet.append(self.comment_row(comment))
            # Text such as "=> see above" must not turn into a formula
            for cell in sheet[sheet.max_row]:
                cell.data_type = 's'

        for column, width in COLUMN_WIDTHS.items():
            sheet.column_dimensions[column].width = width

        # Long, multi-line bodies stay readable without resizing rows
        alignment = Alignment(vertical='top', wrap_text=True)
        for row in sheet.iter_rows(min_row=1, max_row=len(comments) + 1, max_col=len(COLUMN_WIDTHS)):
            for cell in row:
                cell.alignment = alignment

        return workbook

    def generate_comment_sheet(
        self,
        project_name: str,
        repository_name: str,
        pull_request_summary: str,
        comments: List[Comment],
        run_date: datetime = None
    ) -> str:
        """Build the report and save it, overwriting any existing file.

        Args:
            project_name: Name of the selected project
            repository_name: Name of the selected repository
            pull_request_summary: Summary of the selected pull request
            comments: Comments to list, in display order
            run_date: Generation time used in the filename (defaults to now)

        Returns:
            Path of the written file

        Raises:
            ReportWriteError: If the file cannot be written
        """
        filename = generate_filename(project_name, repository_name, pull_request_summary,
                                     run_date or datetime.now())
        path = os.path.join(self.output_dir, filename) if self.output_dir else filename

        workbook = self.build_workbook(comments)
        if os.path.exists(path):
            logging.info(f"Overwriting existing file {path}")
        try:
            workbook.save(path)
        except OSError as e:
            raise ReportWriteError(f"error saving Excel file {path}: {e}") from e

        logging.info(f"Saved {len(comments)} comment(s) to {path}")
        return path

    def summary(self, comments: List[Comment]) -> Dict[str, int]:
        """Count general and inline comments."""
        inline = sum(1 for comment in comments if comment.location is not None)
        return {'total': len(comments), 'inline': inline, 'general': len(comments) - inline}
