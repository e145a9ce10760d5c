"""Repository interfaces for changelog text generation."""

from abc import ABC, abstractmethod

from git_changelog.changelog.domain.value_objects import GenerationResponse


class GenerationBackend(ABC):
    """Interface for LLM providers that complete a prompt."""

    @abstractmethod
    def generate(self, prompt: str) -> GenerationResponse:
        """
        Produce a text completion for a prompt.

        Args:
            prompt: The full prompt to send as a single user message

        Returns:
            GenerationResponse holding the completion text

        Raises:
            BackendError: If the provider call fails or returns no usable text
        """
        ...
