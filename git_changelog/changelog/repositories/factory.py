"""Factory for creating generation backend instances."""

from git_changelog.changelog.domain.exceptions import BackendConfigurationError
from git_changelog.changelog.domain.value_objects import BackendConfig
from git_changelog.changelog.repositories.implementations import (
    AnthropicAgent,
    BedrockAgent,
    VertexAgent,
)
from git_changelog.changelog.repositories.interfaces import GenerationBackend


def create_generation_backend(config: BackendConfig) -> GenerationBackend:
    """
    Create a generation backend based on configuration.

    Bedrock and Vertex AI are opt-in and mutually exclusive; the direct
    Anthropic API is used when neither is selected.

    Args:
        config: Backend configuration

    Returns:
        Generation backend instance (Anthropic, Bedrock or Vertex AI)

    Raises:
        BackendConfigurationError: If both providers are selected or required
            credentials are missing
    """
    if config.use_bedrock and config.use_vertex:
        raise BackendConfigurationError(
            "Bedrock and Vertex AI cannot be used at the same time. "
            "Set only one of use_bedrock or use_vertex"
        )

    if config.use_bedrock:
        return BedrockAgent(config)
    elif config.use_vertex:
        return VertexAgent(config)
    else:
        return AnthropicAgent(config)
