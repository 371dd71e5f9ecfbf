"""LLM Base Classes and Shared Code"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

from haiku_commit import PROVIDER_LABELS
from haiku_commit.cancellation import CancellationToken, GenerationAborted
from haiku_commit.prompts import build_prompt

log = logging.getLogger(__name__)

# Statuses worth another attempt; anything else non-2xx is final
TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})

# Delay before the 2nd and 3rd attempts
RETRY_DELAYS = (0.25, 0.6)

DEFAULT_MAX_TOKENS = 200


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class ProviderConfigError(LLMError):
    """No provider, unknown provider, missing API key or empty model."""
    pass


class ProviderError(LLMError):
    """A backend could not produce a haiku."""
    pass


class ProviderStatusError(ProviderError):
    """Backend answered with a non-2xx HTTP status."""

    def __init__(self, provider: str, status_code: int):
        self.provider = provider
        self.status_code = status_code
        label = PROVIDER_LABELS.get(provider, provider)
        super().__init__(f"{label} API error (status {status_code})")

    @property
    def is_transient(self) -> bool:
        return self.status_code in TRANSIENT_STATUSES


@dataclass(frozen=True)
class ProviderOptions:
    """Everything needed to build a client. Shared read-only by every sample and retry."""
    provider: str
    api_key: str
    model: str = ""
    max_tokens: int = DEFAULT_MAX_TOKENS
    signal: CancellationToken | None = None
    logger: logging.Logger | None = None


class HaikuClient(ABC):
    """
    Abstract base for haiku providers.

    Subclasses only know their wire format (`_call_api`). Prompt building,
    backoff, cancellation and logging live here so every backend behaves
    the same way.
    """

    PROVIDER = ""
    DEFAULT_MODEL = ""
    DEFAULT_TIMEOUT = 60.0

    # Network and response-parsing failures; retried like transient statuses
    TRANSIENT_EXCEPTIONS: tuple[type[BaseException], ...] = (
        httpx.HTTPError, ValueError, LookupError, TypeError, AttributeError,
    )

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        logger: logging.Logger | None = None,
        signal: CancellationToken | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ProviderConfigError(f"No API key found for {self.label}.")
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.max_tokens = max_tokens
        self.log = logger or log
        self.signal = signal or CancellationToken()
        self._http_client = http_client

    @classmethod
    def from_options(cls, options: ProviderOptions, http_client: httpx.AsyncClient | None = None) -> 'HaikuClient':
        return cls(
            api_key=options.api_key,
            model=options.model or None,
            max_tokens=options.max_tokens,
            logger=options.logger,
            signal=options.signal,
            http_client=http_client,
        )

    @property
    def label(self) -> str:
        return PROVIDER_LABELS.get(self.PROVIDER, self.PROVIDER)

    @property
    def name(self) -> str:
        return f"{self.label} ({self.model})"

    @abstractmethod
    async def _call_api(self, prompt: str) -> str:
        """Make a single request and return the raw response text.

        Raises ProviderStatusError for non-2xx responses.
        """

    async def _post(self, url: str, **kwargs) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(url, **kwargs)
        async with httpx.AsyncClient(timeout=self.DEFAULT_TIMEOUT) as client:
            return await client.post(url, **kwargs)

    def _check_status(self, response: httpx.Response) -> None:
        if not response.is_success:
            raise ProviderStatusError(self.PROVIDER, response.status_code)

    async def generate(self, diff: str, corrective_instruction: str | None = None) -> str:
        """Generate a haiku for `diff`, retrying transient failures with a fixed backoff."""
        tag = f"[{self.PROVIDER}]"
        self.log.debug(
            f"{tag} preparing request (model={self.model}, diffLength={len(diff)}, "
            f"maxTokens={self.max_tokens}, corrective={bool(corrective_instruction)})"
        )
        prompt = build_prompt(diff, corrective_instruction)

        last_error = ""
        for attempt in range(len(RETRY_DELAYS) + 1):
            try:
                self.log.debug(f"{tag} request attempt {attempt + 1}")
                text = await self.signal.run(self._call_api(prompt))
                self.log.debug(f"{tag} success on attempt {attempt + 1} (len={len(text)})")
                return text.strip()
            except GenerationAborted:
                self.log.info(f"{tag} request aborted by caller")
                raise
            except ProviderStatusError as e:
                if not e.is_transient:
                    self.log.warning(f"{tag} non-retryable status {e.status_code} terminating")
                    raise
                last_error = f"Transient {e}"
                self.log.warning(f"{tag} {last_error}")
            except self.TRANSIENT_EXCEPTIONS as e:
                last_error = str(e) or type(e).__name__
                self.log.warning(f"{tag} transient failure: {last_error}")

            if attempt < len(RETRY_DELAYS):
                delay = RETRY_DELAYS[attempt]
                self.log.debug(f"{tag} retrying in {int(delay * 1000)}ms")
                await self.signal.sleep(delay)

        detail = f": {last_error}" if last_error else ""
        self.log.error(f"{tag} giving up after {len(RETRY_DELAYS) + 1} attempts")
        raise ProviderError(f"Failed to generate haiku from {self.label}{detail}")
