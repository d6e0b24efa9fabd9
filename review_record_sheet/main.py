"""Entry point: pick a pull request and write its comments to a spreadsheet."""

import logging
import os
import sys

from .api_client import BacklogAPIClient
from .chooser import Chooser
from .cli import ReviewRecordSheetCLI
from .config import Config, load_config
from .exceptions import ReviewSheetError
from .report import ReportBuilder


class StageError(ReviewSheetError):
    """Wraps a pipeline failure with the stage it happened in."""

    def __init__(self, stage: str, cause: ReviewSheetError):
        super().__init__(f"Error {stage}: {cause}")
        self.stage = stage
        self.cause = cause


def _stage(stage: str, func, *args):
    try:
        return func(*args)
    except StageError:
        raise
    except ReviewSheetError as e:
        raise StageError(stage, e) from e


def run(config: Config, chooser: Chooser = None, client: BacklogAPIClient = None,
        builder: ReportBuilder = None) -> str:
    """Run the whole selection, fetch and render pipeline.

    Args:
        config: Loaded configuration
        chooser: Operator prompt (defaults to stdin/stdout)
        client: Backlog API client (built from config when omitted)
        builder: Report builder (built from config when omitted)

    Returns:
        Path of the generated spreadsheet

    Raises:
        StageError: Wrapping the first failure, which aborts the run
    """
    chooser = chooser or Chooser()
    client = client or BacklogAPIClient(config)
    builder = builder or ReportBuilder(language=config.language)
    out = chooser.output_stream

    with client:
        cli = ReviewRecordSheetCLI(client, chooser)

        print("Fetching projects...", file=out)
        project = _stage('selecting project', cli.select_project)
        print(f"Selected project: {project.name}", file=out)

        print("Fetching repositories...", file=out)
        repository = _stage('selecting repository', cli.select_repository, project)
        print(f"Selected repository: {repository.name}", file=out)

        print("Fetching pull requests...", file=out)
        pull_request = _stage('selecting pull request', cli.select_pull_request, project, repository)
        print(f"Selected pull request: {pull_request.summary}", file=out)

        print("Fetching comments...", file=out)
        comments = _stage('fetching comments', client.get_comments,
                          project.id, repository.id, pull_request.number)

    counts = builder.summary(comments)
    print(f"Found {counts['total']} comments ({counts['inline']} inline, {counts['general']} general)",
          file=out)

    print("Generating Excel file...", file=out)
    path = _stage('generating Excel file', builder.generate_comment_sheet,
                  project.name, repository.name, pull_request.summary, comments)

    print(f"Excel file generated successfully: {os.path.abspath(path)}", file=out)
    return path


def main():
    """Main entry point for the script."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )

    print("Backlog Review Record Sheet")
    print("="*80)

    try:
        config = _stage('loading configuration', load_config)
        run(config)
    except StageError as e:
        logging.error(str(e))
        print(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
