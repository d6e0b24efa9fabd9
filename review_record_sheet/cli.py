"""Interactive project -> repository -> pull request selection."""

from .api_client import BacklogAPIClient
from .chooser import Chooser
from .exceptions import EmptyListError
from .models import Project, PullRequest, Repository


class ReviewRecordSheetCLI:
    """Walks the operator down the Backlog hierarchy using one shared Chooser."""

    def __init__(self, client: BacklogAPIClient, chooser: Chooser = None):
        self.client = client
        self.chooser = chooser or Chooser()

    def _print(self, message: str):
        print(message, file=self.chooser.output_stream)

    def select_project(self) -> Project:
        projects = self.client.get_projects()
        if not projects:
            raise EmptyListError("no projects found")

        self._print("Available projects:")
        return self.chooser.select(projects, 'Select a project')

    def select_repository(self, project: Project) -> Repository:
        repositories = self.client.get_repositories(project.id)
        if not repositories:
            raise EmptyListError(f"no repositories found for project '{project.name}'")

        self._print("Available repositories:")
        return self.chooser.select(repositories, 'Select a repository')

    def select_pull_request(self, project: Project, repository: Repository) -> PullRequest:
        pull_requests = self.client.get_pull_requests(project.id, repository.id)
        if not pull_requests:
            raise EmptyListError(f"no pull requests found for repository '{repository.name}'")

        self._print("Available pull requests:")
        return self.chooser.select(pull_requests, 'Select a pull request')
