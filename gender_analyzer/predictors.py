"""Gender predictors for first names.

Every predictor maps a first name to a ``PredictionOutcome`` (gender plus a
0-100 confidence). ``HeuristicPredictor`` works offline; the remote
predictors call Genderize.io, OpenRouter or Perplexity.

Remote predictors have an explicit failure policy (``absorbs_failures``).
When absorbing, any failure (bad status, malformed body, network error,
timeout) is replaced by the heuristic's answer, and the original failure
message travels along in ``PredictionOutcome.error`` so the caller can flag
the entry for re-analysis. When not absorbing, ``PredictionError`` is raised.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type

import requests

from gender_analyzer import config
from gender_analyzer.custom_logger import get_logger
from gender_analyzer.heuristic import heuristic_gender
from gender_analyzer.normalization import extract_first_name

logger = get_logger(__name__)

GENDERS = ("male", "female", "unknown")


class PredictionError(Exception):
    """Raised when a predictor cannot produce an outcome."""


class ProviderRequestError(PredictionError):
    """Raised when a remote provider answers with a non-success status."""


class UnknownProviderError(ValueError):
    """Raised when no predictor is registered for a provider identifier."""


class MissingCredentialError(ValueError):
    """Raised when a provider needs an API key and none was given."""


@dataclass
class PredictionOutcome:
    """Result of a single predictor call.

    Attributes:
        gender: "male", "female" or "unknown"
        confidence: Integer confidence from 0 to 100
        error: Original failure message when a remote call failed and the
            heuristic answer was substituted, otherwise None
    """
    gender: str
    confidence: int
    error: Optional[str] = None


@dataclass
class ProviderConfig:
    """Provider selection plus the settings a predictor is built with.

    Attributes:
        provider: Provider identifier ("simple", "genderize", "openrouter", "perplexity")
        api_key: Credential for the provider, if any
        model: Model identifier for chat-completion providers
        timeout: Per-request timeout in seconds
        endpoint: Override for the provider URL
        absorb_failures: Override for the provider's failure policy
        referer: HTTP-Referer sent to OpenRouter
        title: X-Title sent to OpenRouter
    """
    provider: str = "simple"
    api_key: Optional[str] = None
    model: Optional[str] = None
    timeout: float = config.DEFAULT_TIMEOUT_SECONDS
    endpoint: Optional[str] = None
    absorb_failures: Optional[bool] = None
    referer: str = config.DEFAULT_REFERER
    title: str = config.DEFAULT_TITLE


class Predictor:
    """Base class for gender predictors."""

    provider: str = ""
    requires_api_key: bool = False
    absorbs_failures: bool = False

    def __init__(self, provider_config: Optional[ProviderConfig] = None, session=None):
        self.provider_config = provider_config or ProviderConfig(provider=self.provider)

    def predict(self, first_name: str) -> PredictionOutcome:
        """Predict gender for a first name."""
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the predictor."""


class HeuristicPredictor(Predictor):
    """Offline predictor backed by name tables and ending rules. Never fails."""

    provider = "simple"

    def predict(self, first_name: str) -> PredictionOutcome:
        gender, confidence = heuristic_gender(first_name)
        return PredictionOutcome(gender=gender, confidence=confidence)


class RemotePredictor(Predictor):
    """Base class for predictors backed by an HTTP API."""

    label = "Remote"
    absorbs_failures = True
    default_endpoint: str = ""
    default_model: Optional[str] = None

    def __init__(self, provider_config: Optional[ProviderConfig] = None, session=None):
        super().__init__(provider_config)
        cfg = self.provider_config
        self.api_key = cfg.api_key
        self.model = cfg.model or self.default_model
        self.timeout = cfg.timeout
        self.endpoint = cfg.endpoint or self.default_endpoint
        if cfg.absorb_failures is not None:
            self.absorbs_failures = cfg.absorb_failures
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._fallback = HeuristicPredictor()

    def predict(self, first_name: str) -> PredictionOutcome:
        """Call the provider, applying the failure policy on any error."""
        logger.debug("Calling %s API for: %s", self.label, first_name)
        try:
            outcome = self._request(first_name)
        except (requests.RequestException, PredictionError,
                ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            message = str(exc) or exc.__class__.__name__
            logger.warning("%s error for %s: %s", self.label, first_name, message)
            if not self.absorbs_failures:
                if isinstance(exc, PredictionError):
                    raise
                raise PredictionError(message) from exc
            fallback = self._fallback.predict(first_name)
            return PredictionOutcome(
                gender=fallback.gender,
                confidence=fallback.confidence,
                error=message,
            )

        logger.debug("%s response for %s: %s (%d%%)",
                     self.label, first_name, outcome.gender, outcome.confidence)
        return outcome

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def _request(self, first_name: str) -> PredictionOutcome:
        raise NotImplementedError

    def _check_response(self, response: requests.Response) -> None:
        if not response.ok:
            raise ProviderRequestError(
                f"{self.label} API error: {response.status_code} - {response.text}"
            )


class GenderizePredictor(RemotePredictor):
    """Predictor backed by the Genderize.io name statistics API."""

    provider = "genderize"
    label = "Genderize"
    default_endpoint = config.GENDERIZE_ENDPOINT

    def _request(self, first_name: str) -> PredictionOutcome:
        params = {"name": first_name}
        if self.api_key:
            params["apikey"] = self.api_key

        response = self.session.get(self.endpoint, params=params, timeout=self.timeout)
        self._check_response(response)
        data = response.json()

        gender = data.get("gender") or "unknown"
        if gender not in GENDERS:
            gender = "unknown"
        probability = float(data.get("probability") or 0)
        return PredictionOutcome(gender=gender, confidence=int(probability * 100 + 0.5))


class ChatCompletionPredictor(RemotePredictor):
    """Predictor that asks a chat-completion model for a one-word answer.

    Subclasses set the endpoint, default model, prompt and the confidence
    assigned to a clear ("male"/"female") or unclear reply.
    """

    prompt_template = (
        'What is the most likely gender for the first name "{first_name}"? '
        "Respond with only: male, female, or unknown"
    )
    clear_confidence = 80
    unclear_confidence = 80

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _payload(self, first_name: str) -> dict:
        return {
            "model": self.model,
            "messages": [{
                "role": "user",
                "content": self.prompt_template.format(first_name=first_name),
            }],
            "temperature": 0,
            "max_tokens": 10,
        }

    def _request(self, first_name: str) -> PredictionOutcome:
        response = self.session.post(
            self.endpoint,
            headers=self._headers(),
            json=self._payload(first_name),
            timeout=self.timeout,
        )
        self._check_response(response)
        data = response.json()
        content = data["choices"][0]["message"]["content"]

        gender, confidence = self.parse_reply(content)
        return PredictionOutcome(gender=gender, confidence=confidence)

    def parse_reply(self, content: str) -> Tuple[str, int]:
        """Map a free-text model reply to (gender, confidence).

        "female" wins whenever it appears, since "male" is a substring of it.
        """
        reply = content.lower().strip()
        if "female" in reply:
            return "female", self.clear_confidence
        if "male" in reply:
            return "male", self.clear_confidence
        return "unknown", self.unclear_confidence


class OpenRouterPredictor(ChatCompletionPredictor):
    """Predictor backed by any model routed through OpenRouter."""

    provider = "openrouter"
    label = "OpenRouter"
    requires_api_key = True
    default_endpoint = config.OPENROUTER_ENDPOINT
    default_model = config.OPENROUTER_DEFAULT_MODEL
    prompt_template = (
        'Analyze the first name "{first_name}" and predict the most likely gender. '
        "Consider cultural context and name patterns globally. "
        "Respond with only: male, female, or unknown"
    )
    clear_confidence = 85
    unclear_confidence = 75

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["HTTP-Referer"] = self.provider_config.referer
        headers["X-Title"] = self.provider_config.title
        return headers


class PerplexityPredictor(ChatCompletionPredictor):
    """Predictor backed by the Perplexity chat-completion API."""

    provider = "perplexity"
    label = "Perplexity"
    requires_api_key = True
    default_endpoint = config.PERPLEXITY_ENDPOINT
    default_model = config.PERPLEXITY_DEFAULT_MODEL
    prompt_template = (
        'What is the most likely gender for the first name "{first_name}"? '
        "Consider etymology, cultural origins, and statistical patterns. "
        "Respond with only: male, female, or unknown"
    )


PROVIDERS: Dict[str, Type[Predictor]] = {
    HeuristicPredictor.provider: HeuristicPredictor,
    GenderizePredictor.provider: GenderizePredictor,
    OpenRouterPredictor.provider: OpenRouterPredictor,
    PerplexityPredictor.provider: PerplexityPredictor,
}


def create_predictor(provider_config: ProviderConfig, session=None) -> Predictor:
    """Build the predictor registered for ``provider_config.provider``.

    Args:
        provider_config: Provider identifier plus credential and model
        session: Optional ``requests.Session`` shared by remote predictors

    Returns:
        A ready-to-use Predictor

    Raises:
        UnknownProviderError: If the provider identifier is not registered
        MissingCredentialError: If the provider needs an API key and none is set
    """
    provider = provider_config.provider
    predictor_cls = PROVIDERS.get(provider)
    if predictor_cls is None:
        raise UnknownProviderError(
            f"Unknown provider: {provider}. "
            f"Available providers: {', '.join(sorted(PROVIDERS))}"
        )

    if predictor_cls.requires_api_key and not provider_config.api_key:
        raise MissingCredentialError(f"API key required for {provider}")

    return predictor_cls(provider_config, session=session)


def predict_gender(
    full_name: str,
    provider: str = "simple",
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> PredictionOutcome:
    """
    Predict gender for a single full name.

    This is a convenience function that builds a predictor per call; use
    PredictionPipeline for lists of names.

    Example:
        >>> predict_gender("Dr. Maria Rodriguez")
        PredictionOutcome(gender='female', confidence=85, error=None)
    """
    predictor = create_predictor(
        ProviderConfig(provider=provider, api_key=api_key, model=model)
    )
    try:
        return predictor.predict(extract_first_name(full_name))
    finally:
        predictor.close()
