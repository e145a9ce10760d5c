"""Service for publishing changelog outputs."""

import logging
from pathlib import Path

from git_changelog.outputs.domain.value_objects import ChangelogOutputs
from git_changelog.outputs.repositories.implementations import (
    GitHubActionsOutputRepositoryImpl,
)

logger = logging.getLogger(__name__)

STDOUT_SENTINEL = "stdout"


class OutputService:
    """Service for writing changelog files and step outputs."""

    def __init__(self, output_repository: GitHubActionsOutputRepositoryImpl) -> None:
        """Initialize the output service.

        Args:
            output_repository: Repository for files and GitHub Actions outputs
        """
        self._output_repository = output_repository

    @staticmethod
    def should_write_file(output_file: str) -> bool:
        """Whether ``output_file`` names a real file rather than the stdout sentinel."""
        return bool(output_file) and output_file != STDOUT_SENTINEL

    def write_changelog(self, output_file: str, changelog: str) -> bool:
        """Write the changelog to ``output_file`` unless it is empty or ``stdout``.

        Args:
            output_file: Destination path, relative to the current directory
            changelog: Changelog text

        Returns:
            True if a file was written
        """
        if not self.should_write_file(output_file):
            return False

        path = Path(output_file)
        self._output_repository.write_file(path, changelog)
        logger.info("Changelog written to %s", path)
        return True

    def publish(self, outputs: ChangelogOutputs) -> None:
        """Publish the run's outputs as GitHub Actions step outputs.

        Args:
            outputs: Outputs of the run
        """
        if not self._output_repository.enabled:
            logger.debug("GITHUB_OUTPUT not set; skipping step outputs")
            return

        for name, value in outputs.as_dict().items():
            self._output_repository.set_output(name, value)
