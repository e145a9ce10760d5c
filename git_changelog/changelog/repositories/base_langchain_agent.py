"""Base class for LangChain-based generation backends."""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from langchain_core.messages import HumanMessage

from git_changelog.changelog.domain.exceptions import BackendError
from git_changelog.changelog.domain.value_objects import BackendConfig, GenerationResponse
from git_changelog.changelog.repositories.interfaces import GenerationBackend

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)


class BaseLangChainAgent(GenerationBackend, ABC):
    """Base class for backends that reach Claude through a LangChain chat model."""

    provider_name: str = "LLM"

    def __init__(self, config: BackendConfig) -> None:
        """Initialize the base agent with common configuration.

        Args:
            config: Backend configuration (model id and credentials)
        """
        self._config = config
        self._llm: BaseChatModel  # Set by subclasses

    @property
    def model(self) -> str:
        """Model identifier this backend sends requests to."""
        return self._config.model

    def generate(self, prompt: str) -> GenerationResponse:
        """
        Produce a text completion for a prompt.

        Args:
            prompt: The full prompt to send as a single user message

        Returns:
            GenerationResponse holding the completion text

        Raises:
            BackendError: If the LLM API call fails or the response has no text
        """
        logger.debug(
            "Sending request to %s model '%s'. Prompt length: %d",
            self.provider_name,
            self.model,
            len(prompt),
        )
        try:
            response = self._llm.invoke([HumanMessage(content=prompt)])
            content = self._extract_content(response)
        except Exception as e:
            raise BackendError(
                f"Failed to generate {self.provider_name} response: {str(e)}"
            ) from e

        logger.debug("Received %d characters from %s", len(content), self.provider_name)
        return GenerationResponse(content=content)

    @abstractmethod
    def _extract_content(self, response: Any) -> str:
        """Pull the completion text out of a chat model response."""
        ...

    @staticmethod
    def _first_block_text(response: Any) -> str | None:
        """
        Return the text of the first content block of a response.

        Args:
            response: Message returned by the chat model

        Returns:
            The text, or None when the response is absent or the first block is not text
        """
        if response is None:
            return None
        content = getattr(response, "content", None)
        if isinstance(content, str):
            return content
        if isinstance(content, list) and content:
            block = content[0]
            if isinstance(block, str):
                return block
            if isinstance(block, dict) and block.get("type") == "text":
                text = block.get("text")
                return text if isinstance(text, str) else None
        return None
