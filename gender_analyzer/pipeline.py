"""Sequential prediction pipeline with cooperative cancellation and re-analysis.

Names are processed one at a time, in input order, with a fixed pause
between items to stay under remote API rate limits. ``cancel()`` is only
observed between items: a call already in flight always finishes.
"""
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from gender_analyzer import config
from gender_analyzer.custom_logger import get_logger, mask_secret
from gender_analyzer.normalization import extract_first_name
from gender_analyzer.predictors import Predictor, ProviderConfig, create_predictor

logger = get_logger(__name__)


class PipelineState(Enum):
    """Lifecycle of a PredictionPipeline."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"
    FAILED = "failed"


class PipelineValidationError(ValueError):
    """Raised when a run is rejected before any name is processed."""


@dataclass(frozen=True)
class PredictionResult:
    """Prediction for one input name.

    Attributes:
        name: Full name as given
        first_name: First name extracted from ``name``
        gender: "male", "female" or "unknown"
        confidence: Integer confidence from 0 to 100
        error: Failure message if the prediction failed, otherwise None
        reanalyzed: True once the entry was updated by a re-analysis pass
    """
    name: str
    first_name: str
    gender: str
    confidence: int
    error: Optional[str] = None
    reanalyzed: bool = False

    @property
    def status(self) -> str:
        if self.error:
            return "Error"
        if self.reanalyzed:
            return "Re-analyzed"
        return "Original"


@dataclass
class ReanalysisFilter:
    """Selects results for re-analysis. Enabled flags are OR'd together.

    Attributes:
        unknown: Select results whose gender is "unknown"
        low_confidence: Select known-gender results below ``threshold``
        errors: Select results carrying an error
        threshold: Confidence below which a result counts as low confidence
    """
    unknown: bool = True
    low_confidence: bool = False
    errors: bool = False
    threshold: int = config.LOW_CONFIDENCE_THRESHOLD

    def __call__(self, result: PredictionResult) -> bool:
        if self.unknown and result.gender == "unknown":
            return True
        if self.low_confidence and result.gender != "unknown" and result.confidence < self.threshold:
            return True
        if self.errors and result.error:
            return True
        return False


ResultCallback = Callable[[int, int, PredictionResult], None]


class PredictionPipeline:
    """Runs a predictor over a list of names and keeps the results.

    Example:
        >>> pipeline = PredictionPipeline(delay=0)
        >>> pipeline.start(["Mr. John Smith", "Pat Doe"], ProviderConfig("simple"))
        <PipelineState.COMPLETED: 'completed'>
        >>> [r.gender for r in pipeline.results]
        ['male', 'unknown']
    """

    def __init__(
        self,
        predictor_factory: Callable[[ProviderConfig], Predictor] = create_predictor,
        delay: float = config.DEFAULT_DELAY_SECONDS,
        reanalysis_delay: float = config.DEFAULT_REANALYSIS_DELAY_SECONDS,
        on_result: Optional[ResultCallback] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            predictor_factory: Builds a Predictor from a ProviderConfig; may raise
                ValueError for an unknown provider or missing credential
            delay: Pause between items of a full run, in seconds
            reanalysis_delay: Pause between items of a re-analysis pass, in seconds
            on_result: Optional callback ``(index, total, result)`` after each item
        """
        self.predictor_factory = predictor_factory
        self.delay = delay
        self.reanalysis_delay = reanalysis_delay
        self.on_result = on_result
        self._state = PipelineState.IDLE
        self._cancel_event = threading.Event()
        self._results: List[PredictionResult] = []
        self._last_error: Optional[str] = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is PipelineState.RUNNING

    @property
    def last_error(self) -> Optional[str]:
        """Message of the most recent validation failure, if any."""
        return self._last_error

    @property
    def results(self) -> List[PredictionResult]:
        return self.snapshot()

    def snapshot(self) -> List[PredictionResult]:
        """Return a copy of the current results, in input order."""
        return list(self._results)

    def cancel(self) -> bool:
        """
        Request the running pass to stop after the current name.

        Returns:
            True if a pass was running and will stop, False otherwise
        """
        if not self.is_running:
            return False
        logger.info("Stop requested - analysis will stop after current name")
        self._cancel_event.set()
        return True

    def start(self, names: Iterable[str], provider_config: ProviderConfig) -> PipelineState:
        """
        Predict gender for every name, replacing any previous results.

        Args:
            names: Full names; surrounding whitespace is stripped and blank
                entries are dropped
            provider_config: Provider identifier, credential and model

        Returns:
            COMPLETED if every name was processed, STOPPED if cancelled, or
            RUNNING if another pass is already in progress (nothing is done)

        Raises:
            PipelineValidationError: If there are no names, or the provider is
                unknown or missing its credential. The state becomes FAILED.
        """
        if self.is_running:
            logger.info("Analysis already in progress")
            return self._state

        name_list = [str(name).strip() for name in names if name is not None and str(name).strip()]
        if not name_list:
            self._fail("No valid names found")

        predictor = self._build_predictor(provider_config)

        logger.info("Starting gender analysis of %d names using %s",
                    len(name_list), provider_config.provider)
        if provider_config.api_key:
            logger.info("API key provided: %s", mask_secret(provider_config.api_key))

        self._enter_running(clear_results=True)
        try:
            for index, name in enumerate(self._iterate(name_list, self.delay)):
                logger.info("Processing %d/%d: %s", index + 1, len(name_list), name)
                result = self._predict(predictor, name)
                self._results.append(result)
                self._notify(index, len(name_list), result)
        except BaseException:
            # an escaping exception ends the pass like a cancel
            self._cancel_event.set()
            raise
        finally:
            predictor.close()
            self._finish("Analysis")

        return self._state

    def reanalyze(
        self,
        selection: Callable[[PredictionResult], bool],
        provider_config: ProviderConfig,
    ) -> PipelineState:
        """
        Predict again for the results matched by ``selection``, in place.

        Each selected entry keeps its position and name; gender and
        confidence are overwritten, the error is cleared and ``reanalyzed``
        is set. Entries that are not selected are left as they are.

        Args:
            selection: Predicate over results, e.g. a ReanalysisFilter
            provider_config: Provider identifier, credential and model

        Returns:
            COMPLETED or STOPPED after a pass; the unchanged state if nothing
            was selected or another pass is already in progress

        Raises:
            PipelineValidationError: If the provider is unknown or missing its
                credential. The state becomes FAILED.
        """
        if self.is_running:
            logger.info("Analysis already in progress")
            return self._state

        predictor = self._build_predictor(provider_config)

        indices = [i for i, result in enumerate(self._results) if selection(result)]
        if not indices:
            predictor.close()
            logger.warning("No entries selected for re-analysis")
            return self._state

        logger.info("Re-analyzing %d entries using %s", len(indices), provider_config.provider)

        self._enter_running(clear_results=False)
        try:
            for position, index in enumerate(self._iterate(indices, self.reanalysis_delay)):
                entry = self._results[index]
                logger.info("Re-analyzing %d/%d: %s", position + 1, len(indices), entry.name)
                updated = self._repredict(predictor, entry)
                self._results[index] = updated
                self._notify(position, len(indices), updated)
        except BaseException:
            # an escaping exception ends the pass like a cancel
            self._cancel_event.set()
            raise
        finally:
            predictor.close()
            self._finish("Re-analysis")

        return self._state

    def _iterate(self, items: Sequence, delay: float):
        """Yield items in order, pausing between them until cancelled."""
        for position, item in enumerate(items):
            if self._cancel_event.is_set():
                return
            yield item
            if position < len(items) - 1 and not self._cancel_event.is_set() and delay > 0:
                self._cancel_event.wait(delay)

    def _predict(self, predictor: Predictor, name: str) -> PredictionResult:
        first_name = extract_first_name(name)
        try:
            outcome = predictor.predict(first_name)
        except Exception as exc:  # per-item failures never stop the batch
            logger.error("Error analyzing %s: %s", name, exc)
            return PredictionResult(
                name=name,
                first_name=first_name,
                gender="unknown",
                confidence=0,
                error=str(exc) or exc.__class__.__name__,
            )

        logger.info("%s -> %s (%d%%)", name, outcome.gender, outcome.confidence)
        return PredictionResult(
            name=name,
            first_name=first_name,
            gender=outcome.gender,
            confidence=outcome.confidence,
            error=outcome.error,
        )

    def _repredict(self, predictor: Predictor, entry: PredictionResult) -> PredictionResult:
        try:
            outcome = predictor.predict(entry.first_name)
        except Exception as exc:  # leave the entry as it was
            logger.error("Re-analysis error for %s: %s", entry.name, exc)
            return entry

        logger.info("Re-analyzed %s -> %s (%d%%)", entry.name, outcome.gender, outcome.confidence)
        return replace(
            entry,
            gender=outcome.gender,
            confidence=outcome.confidence,
            error=outcome.error,
            reanalyzed=True,
        )

    def _build_predictor(self, provider_config: ProviderConfig) -> Predictor:
        try:
            return self.predictor_factory(provider_config)
        except ValueError as exc:
            self._fail(str(exc))

    def _fail(self, message: str) -> None:
        self._state = PipelineState.FAILED
        self._last_error = message
        logger.error("Analysis failed: %s", message)
        raise PipelineValidationError(message)

    def _enter_running(self, clear_results: bool) -> None:
        self._state = PipelineState.RUNNING
        self._last_error = None
        self._cancel_event.clear()
        if clear_results:
            self._results = []

    def _finish(self, label: str) -> None:
        if self._cancel_event.is_set():
            self._state = PipelineState.STOPPED
            logger.info("%s stopped by user. Processed %d names.", label, len(self._results))
        else:
            self._state = PipelineState.COMPLETED
            logger.info("%s complete. %d results.", label, len(self._results))
        self._cancel_event.clear()

    def _notify(self, index: int, total: int, result: PredictionResult) -> None:
        if self.on_result is not None:
            self.on_result(index, total, result)
