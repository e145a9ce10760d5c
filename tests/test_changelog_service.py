import json
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from git_changelog.changelog.domain.exceptions import (
    BackendConfigurationError,
    BackendError,
    ConfigurationError,
)
from git_changelog.changelog.domain.value_objects import ChangelogFormat, GenerationResponse
from git_changelog.changelog.repositories.factory import create_generation_backend
from git_changelog.changelog.repositories.interfaces import GenerationBackend
from git_changelog.changelog.services.changelog_service import (
    ChangelogGenerator,
    ChangelogPipeline,
)
from git_changelog.changelog.services.prompt_compiler import PromptCompiler
from git_changelog.changelog.services.response_synthesizer import ResponseSynthesizer
from git_changelog.config import ChangelogConfig
from git_changelog.git.domain.entities import ChangeSet
from git_changelog.git.domain.exceptions import HistoryError
from git_changelog.git.services.git_service import GitService
from git_changelog.outputs.domain.value_objects import ChangelogOutputs
from git_changelog.outputs.repositories.implementations import (
    GitHubActionsOutputRepositoryImpl,
)
from git_changelog.outputs.services.output_service import OutputService

from tests.helpers import make_change_set

MODEL_RESPONSE = "## Fixed\n- Corrected crash on null input"


@pytest.fixture
def backend() -> MagicMock:
    mock_backend = MagicMock(spec=GenerationBackend)
    mock_backend.generate.return_value = GenerationResponse(content=MODEL_RESPONSE)
    return mock_backend


@pytest.fixture
def backend_factory(backend) -> MagicMock:
    return MagicMock(return_value=backend)


@pytest.fixture
def git_service() -> MagicMock:
    service = MagicMock(spec=GitService)
    service.get_latest_tag.return_value = "v1.0.0"
    service.extract.return_value = make_change_set()
    return service


@pytest.fixture
def output_service() -> OutputService:
    return OutputService(GitHubActionsOutputRepositoryImpl(None))


@pytest.fixture
def synthesizer() -> ResponseSynthesizer:
    return ResponseSynthesizer(today=lambda: date(2024, 5, 1))


def _config(tmp_path: Path, **kwargs) -> ChangelogConfig:
    values = {
        "github_token": "ghp_test",
        "anthropic_api_key": "sk-test",
        "output_file": str(tmp_path / "CHANGELOG.md"),
        "repo_path": tmp_path,
    }
    values.update(kwargs)
    return ChangelogConfig(**values)


def _pipeline(git_service, output_service, backend_factory, synthesizer) -> ChangelogPipeline:
    return ChangelogPipeline(
        git_service,
        output_service,
        backend_factory=backend_factory,
        response_synthesizer=synthesizer,
    )


# --- ChangelogGenerator ---


def test_generator_calls_backend_once_with_compiled_prompt(backend, synthesizer):
    change_set = make_change_set()
    generator = ChangelogGenerator(backend, response_synthesizer=synthesizer)

    result = generator.generate_changelog(change_set)

    backend.generate.assert_called_once_with(PromptCompiler().compile(change_set))
    assert result == MODEL_RESPONSE


def test_generator_structured_output(backend, synthesizer):
    result = ChangelogGenerator(backend, response_synthesizer=synthesizer).generate_changelog(
        make_change_set(), ChangelogFormat.STRUCTURED
    )

    document = json.loads(result)
    assert document["sections"] == [
        {"category": "fixed", "items": ["Corrected crash on null input"]}
    ]
    assert document["summary"] == "1 commits, 1 files changed"


# --- ChangelogPipeline ---


def test_pipeline_zero_commits_returns_no_changes(
    tmp_path, git_service, output_service, backend_factory, backend, synthesizer
):
    git_service.extract.return_value = ChangeSet(
        commits=(), files=(), from_ref="v1.0.0", to_ref="HEAD"
    )
    config = _config(tmp_path)

    outputs = _pipeline(git_service, output_service, backend_factory, synthesizer).run(config)

    assert outputs == ChangelogOutputs(changelog="No changes found", changelog_file="", changes_count="0")
    backend_factory.assert_not_called()
    backend.generate.assert_not_called()
    assert not (tmp_path / "CHANGELOG.md").exists()


def test_pipeline_writes_changelog_and_reports_outputs(
    tmp_path, git_service, output_service, backend_factory, synthesizer
):
    changelog_path = tmp_path / "CHANGELOG.md"
    changelog_path.write_text("old content", encoding="utf-8")
    config = _config(tmp_path)

    outputs = _pipeline(git_service, output_service, backend_factory, synthesizer).run(config)

    assert outputs.changelog == MODEL_RESPONSE
    assert outputs.changelog_file == str(changelog_path)
    assert outputs.changes_count == "1"
    assert changelog_path.read_text(encoding="utf-8") == MODEL_RESPONSE
    backend_factory.assert_called_once_with(config.backend_config())


def test_pipeline_defaults_from_tag_to_latest_tag(
    tmp_path, git_service, output_service, backend_factory, synthesizer
):
    _pipeline(git_service, output_service, backend_factory, synthesizer).run(
        _config(tmp_path, to_ref="main")
    )

    git_service.extract.assert_called_once_with("v1.0.0", "main")


def test_pipeline_explicit_from_tag_skips_lookup(
    tmp_path, git_service, output_service, backend_factory, synthesizer
):
    _pipeline(git_service, output_service, backend_factory, synthesizer).run(
        _config(tmp_path, from_tag="v0.9.0")
    )

    git_service.get_latest_tag.assert_not_called()
    git_service.extract.assert_called_once_with("v0.9.0", "HEAD")


def test_pipeline_without_any_tag_fails(
    tmp_path, git_service, output_service, backend_factory, synthesizer
):
    git_service.get_latest_tag.return_value = None

    with pytest.raises(ConfigurationError, match="no tags found"):
        _pipeline(git_service, output_service, backend_factory, synthesizer).run(_config(tmp_path))

    git_service.extract.assert_not_called()


def test_pipeline_stdout_sentinel_skips_file_write(
    tmp_path, git_service, output_service, backend_factory, synthesizer, monkeypatch
):
    monkeypatch.chdir(tmp_path)

    outputs = _pipeline(git_service, output_service, backend_factory, synthesizer).run(
        _config(tmp_path, output_file="stdout")
    )

    assert outputs.changelog == MODEL_RESPONSE
    assert outputs.changelog_file == "stdout"
    assert not (tmp_path / "stdout").exists()


def test_pipeline_json_format(tmp_path, git_service, output_service, backend_factory, synthesizer):
    outputs = _pipeline(git_service, output_service, backend_factory, synthesizer).run(
        _config(tmp_path, format=ChangelogFormat.STRUCTURED)
    )

    document = json.loads(outputs.changelog)
    assert document["date"] == "2024-05-01"
    assert document["sections"][0]["category"] == "fixed"


def test_pipeline_vertex_without_project_fails_before_prompt(
    tmp_path, git_service, output_service, synthesizer
):
    config = _config(tmp_path, use_vertex=True, vertex_project_id=None)

    with patch.object(PromptCompiler, "compile") as mock_compile:
        with pytest.raises(BackendConfigurationError, match="project ID is required"):
            _pipeline(git_service, output_service, create_generation_backend, synthesizer).run(
                config
            )

    mock_compile.assert_not_called()
    assert not (tmp_path / "CHANGELOG.md").exists()


def test_pipeline_backend_failure_is_fatal(
    tmp_path, git_service, output_service, backend_factory, backend, synthesizer
):
    backend.generate.side_effect = BackendError("Failed to generate Claude response: 500")

    with pytest.raises(BackendError, match="500"):
        _pipeline(git_service, output_service, backend_factory, synthesizer).run(_config(tmp_path))

    backend.generate.assert_called_once()
    assert not (tmp_path / "CHANGELOG.md").exists()


def test_pipeline_history_error_propagates(
    tmp_path, git_service, output_service, backend_factory, synthesizer
):
    git_service.extract.side_effect = HistoryError("Failed to analyze git changes: bad revision")

    with pytest.raises(HistoryError):
        _pipeline(git_service, output_service, backend_factory, synthesizer).run(_config(tmp_path))

    backend_factory.assert_not_called()
