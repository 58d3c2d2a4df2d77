"""
AI Completion Providers

The controller depends only on CompletionProvider. OpenAIProvider is the
production implementation over the OpenAI chat completions API.
"""

from typing import Optional, Protocol

from openai import APIConnectionError, APIError, AsyncOpenAI, AuthenticationError, NotFoundError, RateLimitError
from pydantic import BaseModel, Field

from .config import config
from .exceptions import ConfigurationError, ProviderError
from .logging_config import get_logger

logger = get_logger(__name__)


class CompletionRequest(BaseModel):
    """One generation request."""
    system_prompt: str
    user_prompt: str
    max_tokens: int = Field(gt=0)
    temperature: float = Field(ge=0.0, le=2.0)


class CompletionResponse(BaseModel):
    text: str


class CompletionProvider(Protocol):
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Generate text; failures raise ProviderError."""
        ...


class OpenAIProvider:
    """CompletionProvider backed by openai.AsyncOpenAI."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None
    ):
        self.model = model or config.openai_model
        if client is None:
            key = api_key or config.openai_api_key
            if not key:
                raise ConfigurationError(
                    "OPENAI_API_KEY is not set. Add it to your .env file.",
                    config_key="OPENAI_API_KEY"
                )
            client = AsyncOpenAI(api_key=key)
        self.client = client

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        logger.info(
            f"Sending request to OpenAI ({self.model}), prompt length "
            f"{len(request.user_prompt)} chars, max_tokens={request.max_tokens}"
        )
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": request.system_prompt},
                    {"role": "user", "content": request.user_prompt}
                ],
                max_tokens=request.max_tokens,
                temperature=request.temperature
            )
        except AuthenticationError as e:
            raise ProviderError(
                "Invalid API key",
                suggestion="Please check your OPENAI_API_KEY in the .env file",
                model=self.model
            ) from e
        except NotFoundError as e:
            raise ProviderError(
                "Model not available",
                suggestion="The specified model may not be available. Try updating OPENAI_MODEL in your .env file.",
                model=self.model
            ) from e
        except RateLimitError as e:
            raise ProviderError(
                "Rate limit or quota exceeded",
                suggestion="Wait a moment and try again, or check your OpenAI plan limits",
                model=self.model
            ) from e
        except APIConnectionError as e:
            raise ProviderError(
                "Could not reach the OpenAI API",
                suggestion="Check your network connection",
                model=self.model
            ) from e
        except APIError as e:
            raise ProviderError(
                e.message,
                suggestion="Check your OpenAI API key and model availability",
                model=self.model
            ) from e

        content = response.choices[0].message.content or ""
        logger.info(f"Response received from OpenAI ({len(content)} chars)")
        return CompletionResponse(text=content)
