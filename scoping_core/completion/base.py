from abc import ABC, abstractmethod

from ..entities import ChatCompletion


class BaseCompletionClient(ABC):
    """Abstract base for chat-completion providers."""

    @abstractmethod
    async def post_prompt(self, context: str, prompt: str) -> ChatCompletion:
        """
        Send a prompt with a system context and return the structured completion.

        Args:
            context (str): System/persona instruction.
            prompt (str): User prompt.

        Returns:
            ChatCompletion: The provider response.

        Raises:
            CompletionError: If no usable completion could be obtained.
        """
        pass
