"""Value objects for Changelog domain."""

from dataclasses import dataclass
from enum import Enum

from git_changelog.changelog.domain.exceptions import ConfigurationError

DEFAULT_MAX_TOKENS = 4000


class ChangelogCategory(str, Enum):
    """Keep a Changelog section categories."""

    ADDED = "added"
    CHANGED = "changed"
    DEPRECATED = "deprecated"
    REMOVED = "removed"
    FIXED = "fixed"
    SECURITY = "security"

    @property
    def title(self) -> str:
        """Header word as it appears in a changelog, e.g. ``Added``."""
        return self.value.capitalize()


class ChangelogFormat(str, Enum):
    """Output format of a generated changelog."""

    MARKDOWN = "markdown"
    STRUCTURED = "structured"

    @classmethod
    def from_input(cls, value: str) -> "ChangelogFormat":
        """
        Map an external format name onto a ChangelogFormat.

        Args:
            value: ``markdown``, ``json`` or ``structured`` (case-insensitive)

        Returns:
            The matching format

        Raises:
            ConfigurationError: If the format name is unknown
        """
        normalized = value.strip().lower()
        if normalized == "markdown":
            return cls.MARKDOWN
        if normalized in ("json", "structured"):
            return cls.STRUCTURED
        raise ConfigurationError(
            f"Invalid format: {value}. Supported values: 'markdown', 'json'"
        )


@dataclass(frozen=True)
class GenerationResponse:
    """Text produced by a generation backend."""

    content: str


@dataclass(frozen=True)
class BackendConfig:
    """Configuration for constructing a generation backend.

    Attributes:
        model: Model identifier passed to the provider
        anthropic_api_key: API key for the direct Anthropic backend
        use_bedrock: Route requests through Amazon Bedrock
        use_vertex: Route requests through Google Vertex AI
        bedrock_region: AWS region for Bedrock
        vertex_project_id: Google Cloud project for Vertex AI
        vertex_region: Google Cloud region for Vertex AI
        max_tokens: Output token ceiling for a single completion
    """

    model: str
    anthropic_api_key: str | None = None
    use_bedrock: bool = False
    use_vertex: bool = False
    bedrock_region: str = "us-east-1"
    vertex_project_id: str | None = None
    vertex_region: str = "us-central1"
    max_tokens: int = DEFAULT_MAX_TOKENS
