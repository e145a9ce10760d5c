"""Configuration loading for changelog generation.

Inputs follow the GitHub Actions convention (``INPUT_<NAME>`` environment
variables) so the same code runs as an action step or from a shell, with
``.env`` files loaded through python-dotenv.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from git_changelog.changelog.domain.exceptions import ConfigurationError
from git_changelog.changelog.domain.value_objects import BackendConfig, ChangelogFormat

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_TO_REF = "HEAD"
DEFAULT_OUTPUT_FILE = "CHANGELOG.md"
DEFAULT_BEDROCK_REGION = "us-east-1"
DEFAULT_VERTEX_REGION = "us-central1"
DEFAULT_LOG_LEVEL = "INFO"


def _load_env_file() -> None:
    """Load environment variables from .env file."""
    # Try to find .env file in project root (parent of git_changelog package)
    project_root = Path(__file__).parent.parent
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        # Fallback: try current directory
        load_dotenv()


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Read an action input the way GitHub Actions exposes it.

    Args:
        name: Input name, e.g. ``from_tag``
        environ: Environment mapping. Defaults to ``os.environ``

    Returns:
        The stripped input value, or an empty string if unset
    """
    env = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


@dataclass(frozen=True)
class ChangelogConfig:
    """Resolved inputs for one changelog generation run."""

    github_token: str
    anthropic_api_key: str | None = None
    from_tag: str | None = None
    to_ref: str = DEFAULT_TO_REF
    output_file: str = DEFAULT_OUTPUT_FILE
    format: ChangelogFormat = ChangelogFormat.MARKDOWN
    model: str = DEFAULT_MODEL
    use_bedrock: bool = False
    use_vertex: bool = False
    bedrock_region: str = DEFAULT_BEDROCK_REGION
    vertex_project_id: str | None = None
    vertex_region: str = DEFAULT_VERTEX_REGION
    repo_path: Path = field(default_factory=Path.cwd)
    log_level: str = DEFAULT_LOG_LEVEL

    def backend_config(self) -> BackendConfig:
        """Configuration record for the generation backend."""
        return BackendConfig(
            model=self.model,
            anthropic_api_key=self.anthropic_api_key,
            use_bedrock=self.use_bedrock,
            use_vertex=self.use_vertex,
            bedrock_region=self.bedrock_region,
            vertex_project_id=self.vertex_project_id,
            vertex_region=self.vertex_region,
        )


def load_config(environ: Mapping[str, str] | None = None, **overrides: Any) -> ChangelogConfig:
    """
    Resolve the run configuration.

    Precedence per setting: explicit override (CLI flag), ``INPUT_*``
    variable, conventional environment variable, default. Overrides that
    are None count as not given.

    Args:
        environ: Environment mapping. Defaults to ``os.environ`` after loading ``.env``
        **overrides: Values for ChangelogConfig fields

    Returns:
        The resolved configuration

    Raises:
        ConfigurationError: If the GitHub token is missing or an input is invalid
    """
    if environ is None:
        _load_env_file()
        environ = os.environ

    def resolve(name: str, *fallback_vars: str, default: str | None = None) -> str | None:
        value = overrides.get(name)
        if value is not None:
            return str(value)
        value = get_input(name, environ)
        if value:
            return value
        for var in fallback_vars:
            value = environ.get(var, "").strip()
            if value:
                return value
        return default

    def resolve_flag(name: str) -> bool:
        value = overrides.get(name)
        if value is not None:
            return bool(value)
        return get_input(name, environ).lower() == "true"

    github_token = resolve("github_token", "GITHUB_TOKEN")
    if not github_token:
        raise ConfigurationError("GitHub token is required")

    repo_path = resolve("repo_path")

    return ChangelogConfig(
        github_token=github_token,
        anthropic_api_key=resolve("anthropic_api_key", "ANTHROPIC_API_KEY"),
        from_tag=resolve("from_tag"),
        to_ref=resolve("to_ref", default=DEFAULT_TO_REF) or DEFAULT_TO_REF,
        output_file=resolve("output_file", default=DEFAULT_OUTPUT_FILE) or DEFAULT_OUTPUT_FILE,
        format=ChangelogFormat.from_input(resolve("format", default="markdown") or "markdown"),
        model=resolve("model", "ANTHROPIC_MODEL", default=DEFAULT_MODEL) or DEFAULT_MODEL,
        use_bedrock=resolve_flag("use_bedrock"),
        use_vertex=resolve_flag("use_vertex"),
        bedrock_region=resolve("bedrock_region", default=DEFAULT_BEDROCK_REGION)
        or DEFAULT_BEDROCK_REGION,
        vertex_project_id=resolve("vertex_project_id"),
        vertex_region=resolve("vertex_region", default=DEFAULT_VERTEX_REGION)
        or DEFAULT_VERTEX_REGION,
        repo_path=Path(repo_path) if repo_path else Path.cwd(),
        log_level=(resolve("log_level", default=DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )
