"""Changelog service for orchestrating changelog generation."""

import logging
from collections.abc import Callable

from git_changelog.changelog.domain.exceptions import ConfigurationError
from git_changelog.changelog.domain.value_objects import BackendConfig, ChangelogFormat
from git_changelog.changelog.repositories.factory import create_generation_backend
from git_changelog.changelog.repositories.interfaces import GenerationBackend
from git_changelog.changelog.services.prompt_compiler import PromptCompiler
from git_changelog.changelog.services.response_synthesizer import ResponseSynthesizer
from git_changelog.config import ChangelogConfig
from git_changelog.git.domain.entities import ChangeSet
from git_changelog.git.services.git_service import GitService
from git_changelog.outputs.domain.value_objects import ChangelogOutputs
from git_changelog.outputs.services.output_service import OutputService

logger = logging.getLogger(__name__)


class ChangelogGenerator:
    """Generates changelog text for a change set with a single backend call."""

    def __init__(
        self,
        backend: GenerationBackend,
        prompt_compiler: PromptCompiler | None = None,
        response_synthesizer: ResponseSynthesizer | None = None,
    ) -> None:
        """
        Initialize ChangelogGenerator.

        Args:
            backend: Generation backend to call
            prompt_compiler: Prompt builder. Defaults to PromptCompiler()
            response_synthesizer: Response formatter. Defaults to ResponseSynthesizer()
        """
        self._backend = backend
        self._prompt_compiler = prompt_compiler or PromptCompiler()
        self._response_synthesizer = response_synthesizer or ResponseSynthesizer()

    def generate_changelog(
        self, change_set: ChangeSet, fmt: ChangelogFormat = ChangelogFormat.MARKDOWN
    ) -> str:
        """
        Generate the changelog for a change set.

        Args:
            change_set: Commits and file changes to describe
            fmt: Output format

        Returns:
            Changelog text in the requested format

        Raises:
            BackendError: If the generation backend fails
        """
        prompt = self._prompt_compiler.compile(change_set)
        response = self._backend.generate(prompt)
        return self._response_synthesizer.synthesize(response.content, change_set, fmt)


class ChangelogPipeline:
    """Runs a complete changelog generation: history, generation, outputs."""

    def __init__(
        self,
        git_service: GitService,
        output_service: OutputService,
        backend_factory: Callable[[BackendConfig], GenerationBackend] | None = None,
        response_synthesizer: ResponseSynthesizer | None = None,
    ) -> None:
        """
        Initialize ChangelogPipeline.

        Args:
            git_service: Service for reading repository history
            output_service: Service for writing the changelog file
            backend_factory: Builds the generation backend from its configuration.
                Defaults to create_generation_backend
            response_synthesizer: Response formatter. Defaults to ResponseSynthesizer()
        """
        self._git_service = git_service
        self._output_service = output_service
        self._backend_factory = backend_factory or create_generation_backend
        self._response_synthesizer = response_synthesizer

    def run(self, config: ChangelogConfig) -> ChangelogOutputs:
        """
        Generate a changelog for the configured range.

        Args:
            config: Resolved run configuration

        Returns:
            Outputs of the run

        Raises:
            ConfigurationError: If no start tag is given and the repository has none
            HistoryError: If the revision range cannot be read
            BackendError: If backend construction or generation fails
            RuntimeError: If the changelog file cannot be written
        """
        from_tag = config.from_tag or self._git_service.get_latest_tag()
        if not from_tag:
            raise ConfigurationError("No from tag specified and no tags found in repository")

        logger.info("Analyzing changes from %s to %s", from_tag, config.to_ref)
        change_set = self._git_service.extract(from_tag, config.to_ref)

        if change_set.is_empty:
            logger.info("No changes found between the specified references")
            return ChangelogOutputs.no_changes()

        logger.info(
            "Found %d commits with changes (%d files, +%d -%d)",
            len(change_set.commits),
            len(change_set.files),
            change_set.total_insertions,
            change_set.total_deletions,
        )

        backend = self._backend_factory(config.backend_config())
        generator = ChangelogGenerator(
            backend, response_synthesizer=self._response_synthesizer
        )
        changelog = generator.generate_changelog(change_set, config.format)
        logger.info("Changelog generated successfully")

        self._output_service.write_changelog(config.output_file, changelog)

        return ChangelogOutputs(
            changelog=changelog,
            changelog_file=config.output_file,
            changes_count=str(len(change_set.commits)),
        )
