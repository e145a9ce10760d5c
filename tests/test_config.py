from pathlib import Path

import pytest

from git_changelog.changelog.domain.exceptions import ConfigurationError
from git_changelog.changelog.domain.value_objects import BackendConfig, ChangelogFormat
from git_changelog.config import DEFAULT_MODEL, get_input, load_config


def test_defaults_with_only_token():
    config = load_config(environ={"GITHUB_TOKEN": "ghp_env"})

    assert config.github_token == "ghp_env"
    assert config.anthropic_api_key is None
    assert config.from_tag is None
    assert config.to_ref == "HEAD"
    assert config.output_file == "CHANGELOG.md"
    assert config.format is ChangelogFormat.MARKDOWN
    assert config.model == DEFAULT_MODEL
    assert config.use_bedrock is False
    assert config.use_vertex is False
    assert config.bedrock_region == "us-east-1"
    assert config.vertex_project_id is None
    assert config.vertex_region == "us-central1"
    assert config.log_level == "INFO"


def test_missing_github_token_is_configuration_error():
    with pytest.raises(ConfigurationError, match="GitHub token is required"):
        load_config(environ={})


def test_action_inputs_are_read():
    environ = {
        "INPUT_GITHUB_TOKEN": "ghp_input",
        "INPUT_ANTHROPIC_API_KEY": "sk-input",
        "INPUT_FROM_TAG": " v1.0.0 ",
        "INPUT_TO_REF": "release",
        "INPUT_OUTPUT_FILE": "stdout",
        "INPUT_FORMAT": "json",
        "INPUT_MODEL": "claude-test",
        "INPUT_USE_VERTEX": "TRUE",
        "INPUT_VERTEX_PROJECT_ID": "my-project",
        "INPUT_VERTEX_REGION": "europe-west1",
        "INPUT_REPO_PATH": "/work/repo",
    }

    config = load_config(environ=environ)

    assert config.github_token == "ghp_input"
    assert config.anthropic_api_key == "sk-input"
    assert config.from_tag == "v1.0.0"
    assert config.to_ref == "release"
    assert config.output_file == "stdout"
    assert config.format is ChangelogFormat.STRUCTURED
    assert config.model == "claude-test"
    assert config.use_vertex is True
    assert config.use_bedrock is False
    assert config.vertex_project_id == "my-project"
    assert config.vertex_region == "europe-west1"
    assert config.repo_path == Path("/work/repo")


def test_precedence_override_then_input_then_env():
    environ = {
        "INPUT_ANTHROPIC_API_KEY": "sk-input",
        "ANTHROPIC_API_KEY": "sk-env",
        "GITHUB_TOKEN": "ghp_env",
        "ANTHROPIC_MODEL": "claude-env",
    }

    assert load_config(environ=environ).anthropic_api_key == "sk-input"
    assert load_config(environ=environ, anthropic_api_key="sk-flag").anthropic_api_key == "sk-flag"
    assert load_config(environ=environ).model == "claude-env"
    assert load_config(environ=environ, model=None).model == "claude-env"


def test_boolean_inputs_only_accept_true():
    environ = {"GITHUB_TOKEN": "t", "INPUT_USE_BEDROCK": "yes"}

    assert load_config(environ=environ).use_bedrock is False
    assert load_config(environ=environ, use_bedrock=True).use_bedrock is True


def test_invalid_format_is_rejected():
    with pytest.raises(ConfigurationError, match="Invalid format"):
        load_config(environ={"GITHUB_TOKEN": "t", "INPUT_FORMAT": "yaml"})


@pytest.mark.parametrize(
    "value, expected",
    [
        ("markdown", ChangelogFormat.MARKDOWN),
        ("JSON", ChangelogFormat.STRUCTURED),
        ("structured", ChangelogFormat.STRUCTURED),
    ],
)
def test_format_from_input(value, expected):
    assert ChangelogFormat.from_input(value) is expected


def test_backend_config_carries_backend_fields():
    config = load_config(
        environ={"GITHUB_TOKEN": "t"},
        anthropic_api_key="sk",
        use_bedrock=True,
        bedrock_region="eu-central-1",
        model="m",
    )

    assert config.backend_config() == BackendConfig(
        model="m",
        anthropic_api_key="sk",
        use_bedrock=True,
        use_vertex=False,
        bedrock_region="eu-central-1",
        vertex_project_id=None,
        vertex_region="us-central1",
    )


def test_get_input_normalizes_name():
    environ = {"INPUT_FROM_TAG": "  v2.0.0\n"}

    assert get_input("from_tag", environ) == "v2.0.0"
    assert get_input("from tag", environ) == "v2.0.0"
    assert get_input("missing", environ) == ""
