"""Concrete implementations of output repositories."""

import uuid
from pathlib import Path


class GitHubActionsOutputRepositoryImpl:
    """Writes step outputs to the GitHub Actions output file and changelogs to disk."""

    def __init__(self, output_path: Path | None = None) -> None:
        """Initialize the repository.

        Args:
            output_path: File named by ``$GITHUB_OUTPUT``. Outputs are dropped
                when None (not running inside GitHub Actions)
        """
        self._output_path = output_path

    @property
    def enabled(self) -> bool:
        """Whether step outputs are written anywhere."""
        return self._output_path is not None

    def set_output(self, name: str, value: str) -> None:
        """Append a step output using the multiline ``name<<DELIMITER`` syntax.

        Args:
            name: Output name
            value: Output value, may span several lines

        Raises:
            ValueError: If the name is empty
            RuntimeError: If the output file cannot be written
        """
        if not name:
            raise ValueError("Output name cannot be empty")
        if self._output_path is None:
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        try:
            with self._output_path.open("a", encoding="utf-8") as f:
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        except OSError as e:
            raise RuntimeError(f"Failed to write output '{name}': {e}") from e

    @staticmethod
    def write_file(path: Path, content: str) -> None:
        """Write content verbatim, replacing any existing file.

        Args:
            path: Destination file
            content: Text to write

        Raises:
            RuntimeError: If the file cannot be written
        """
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise RuntimeError(f"Failed to write changelog to {path}: {e}") from e
