"""Concrete generation backends using LangChain."""

from typing import Any

from botocore.config import Config
from langchain_anthropic import ChatAnthropic
from langchain_aws import ChatBedrock
from langchain_google_vertexai.model_garden import ChatAnthropicVertex

from git_changelog.changelog.domain.exceptions import (
    BackendConfigurationError,
    BackendError,
)
from git_changelog.changelog.domain.value_objects import BackendConfig
from git_changelog.changelog.repositories.base_langchain_agent import (
    BaseLangChainAgent,
)


class AnthropicAgent(BaseLangChainAgent):
    """Backend calling the Anthropic API directly with an API key."""

    provider_name = "Claude"

    def __init__(self, config: BackendConfig) -> None:
        """
        Initialize the Anthropic agent.

        Args:
            config: Backend configuration; ``anthropic_api_key`` is required

        Raises:
            BackendConfigurationError: If no API key is configured
        """
        if not config.anthropic_api_key:
            raise BackendConfigurationError(
                "Anthropic API key is required when not using Bedrock or Vertex AI"
            )

        super().__init__(config)
        self._llm = ChatAnthropic(  # type: ignore[call-arg]
            model_name=config.model,
            api_key=config.anthropic_api_key,
            max_tokens=config.max_tokens,
            max_retries=0,
        )

    def _extract_content(self, response: Any) -> str:
        text = self._first_block_text(response)
        if text is None:
            raise BackendError("Unexpected response type from Claude")
        return text


class BedrockAgent(BaseLangChainAgent):
    """Backend invoking Claude through Amazon Bedrock with ambient AWS credentials."""

    provider_name = "Bedrock"

    def __init__(self, config: BackendConfig) -> None:
        """
        Initialize the Bedrock agent.

        Args:
            config: Backend configuration; ``bedrock_region`` selects the AWS region
        """
        super().__init__(config)
        self._llm = ChatBedrock(  # type: ignore[call-arg]
            model_id=config.model,
            region_name=config.bedrock_region,
            model_kwargs={"max_tokens": config.max_tokens},
            config=Config(retries={"total_max_attempts": 1}),
        )

    def _extract_content(self, response: Any) -> str:
        text = self._first_block_text(response)
        if not text:
            raise BackendError("Unexpected response format from Bedrock")
        return text


class VertexAgent(BaseLangChainAgent):
    """Backend invoking Claude through Google Vertex AI."""

    provider_name = "Vertex AI"

    def __init__(self, config: BackendConfig) -> None:
        """
        Initialize the Vertex AI agent.

        Args:
            config: Backend configuration; ``vertex_project_id`` is required

        Raises:
            BackendConfigurationError: If no project ID is configured
        """
        if not config.vertex_project_id:
            raise BackendConfigurationError(
                "Vertex AI project ID is required when using Vertex AI"
            )

        super().__init__(config)
        self._llm = ChatAnthropicVertex(  # type: ignore[call-arg]
            model_name=config.model,
            project=config.vertex_project_id,
            location=config.vertex_region,
            max_output_tokens=config.max_tokens,
            max_retries=0,
        )

    def _extract_content(self, response: Any) -> str:
        text = self._first_block_text(response)
        if not text:
            raise BackendError("No content in Vertex AI response")
        return text
