"""
Runtime vector space model classifier with incremental learning.

The service owns one vocabulary/IDF pair (fixed after training) and a map of
per-label centroids. ``classify`` reads whatever centroids are resident;
``learn`` nudges them toward a user's own labeled mail with an exponential
moving average and never touches the vocabulary or IDF table.

Resident state is an immutable snapshot. Writers (``learn``, ``load_model``)
build a new snapshot under a lock and swap the reference, so ``classify``
never blocks and never sees a half-applied update.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import structlog
from pydantic import ValidationError

from ..config import settings
from ..models.api_models import ClassificationResult, ClassifyRequest, LabeledEmail
from ..models.artifact import ModelArtifact
from ..training.pipeline import compute_label_centroids
from ..vsm.centroids import blend_centroid, nearest_centroid
from ..vsm.vectorizer import VectorSpace
from .fallback import fallback_label
from .model_store import ModelArtifactError, load_artifact, parse_artifact, save_artifact


logger = structlog.get_logger(__name__)

STATE_UNTRAINED = "untrained"
STATE_TRAINED = "trained"


@dataclass(frozen=True)
class ModelState:
    """Snapshot of the resident model."""

    space: VectorSpace
    centroids: Mapping[str, np.ndarray] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "ModelState":
        return cls(space=VectorSpace.from_terms([], {}), centroids={})

    @classmethod
    def from_artifact(cls, artifact: ModelArtifact) -> "ModelState":
        return cls(
            space=VectorSpace.from_terms(artifact.vocabulary, artifact.idf),
            centroids={
                label: np.asarray(vector, dtype=np.float64)
                for label, vector in artifact.centroids.items()
            },
        )


class VSMClassifierService:
    """
    Nearest-centroid email classifier.

    Usage:
        >>> service = VSMClassifierService("models/trained_model.json")
        >>> service.classify("Verify your account now", "security@fake-bank.com", "...")
        ClassificationResult(label='Phishing', score=0.71, fallback_used=False)
        >>> service.schedule_learn([{"subject": "...", "sender": "...", "body": "...", "label": "Work"}])

    Without an artifact the service starts untrained: every message goes
    through the sender fallback until a model is loaded or ``learn`` sees at
    least one labeled email.
    """

    def __init__(
        self,
        artifact_path: Optional[Union[str, Path]] = None,
        persist_learned: Optional[bool] = None,
        learning_rate: Optional[float] = None,
        confidence_threshold: Optional[float] = None,
    ) -> None:
        """
        Initialize the service, loading ``artifact_path`` when given.

        Args:
            artifact_path: Model artifact to load; also the default save target
            persist_learned: Save adapted centroids after each learn batch
                (default: settings.persist_learned_centroids)
            learning_rate: Blend weight of new centroids (default: settings)
            confidence_threshold: Score below which the fallback applies (default: settings)
        """
        self.artifact_path = Path(artifact_path) if artifact_path else None
        self.persist_learned = (
            settings.persist_learned_centroids if persist_learned is None else persist_learned
        )
        self.learning_rate = settings.learning_rate if learning_rate is None else learning_rate
        self.confidence_threshold = (
            settings.confidence_threshold if confidence_threshold is None else confidence_threshold
        )
        self.learn_min_body_length = settings.learn_min_body_length

        self._state = ModelState.empty()
        self._lock = threading.Lock()
        self._save_lock = threading.Lock()
        self._executor_lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

        if self.artifact_path is not None:
            self.load_model_file(self.artifact_path)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> str:
        return STATE_TRAINED if self._state.centroids else STATE_UNTRAINED

    @property
    def is_trained(self) -> bool:
        return bool(self._state.centroids)

    @property
    def labels(self) -> List[str]:
        return list(self._state.centroids)

    @property
    def vocabulary_size(self) -> int:
        return self._state.space.dimensions

    def centroid(self, label: str) -> Optional[np.ndarray]:
        """Copy of a label's resident centroid, or None."""
        vector = self._state.centroids.get(label)
        return None if vector is None else vector.copy()

    # ------------------------------------------------------------------
    # Model lifecycle
    # ------------------------------------------------------------------

    def load_model(self, artifact: Union[ModelArtifact, Dict[str, Any], str, bytes]) -> None:
        """
        Replace vocabulary, IDF and centroids with those of ``artifact``.

        Mismatched centroids are dropped individually. The swap is atomic:
        concurrent classifications see either the old or the new model.

        Raises:
            ModelArtifactError: If the artifact is malformed; the resident
                model is left unchanged
        """
        new_state = ModelState.from_artifact(parse_artifact(artifact))
        with self._lock:
            self._state = new_state

        logger.info(
            "model_loaded",
            vocabulary_size=new_state.space.dimensions,
            labels=list(new_state.centroids),
        )

    def load_model_file(self, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Load an artifact file.

        Args:
            path: Artifact path (default: the service's artifact_path)

        Returns:
            True if the model was loaded, False if it was missing or malformed
        """
        load_path = Path(path) if path else self.artifact_path
        if load_path is None:
            logger.warning("model_path_not_configured")
            return False

        try:
            self.load_model(load_artifact(load_path))
        except ModelArtifactError as e:
            logger.error("model_load_failed", path=str(load_path), error=str(e), state=self.state)
            return False

        self.artifact_path = load_path
        return True

    def export_model(self) -> ModelArtifact:
        """Resident model as a serializable artifact."""
        state = self._state
        return ModelArtifact(
            vocabulary=list(state.space.vocabulary),
            idf=dict(state.space.idf),
            centroids={label: vector.tolist() for label, vector in state.centroids.items()},
        )

    def save_model(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Persist the resident model, including adapted centroids.

        Saves are serialized; each one exports the model current at that moment.

        Args:
            path: Target file (default: artifact_path, then settings.model_path)

        Raises:
            ValueError: If no path is given or configured
        """
        save_path = path or self.artifact_path or settings.model_path
        if not save_path:
            raise ValueError("No model path given or configured")
        with self._save_lock:
            return save_artifact(self.export_model(), save_path)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, subject: str, sender: str, body: str) -> ClassificationResult:
        """
        Classify a message by its nearest centroid.

        Scores below the confidence threshold, or an empty centroid map,
        route the message through the sender fallback.

        Args:
            subject: Subject line
            sender: Sender address
            body: Message body

        Returns:
            ClassificationResult with label and best cosine similarity
        """
        state = self._state
        vector = state.space.vectorize(body or "", subject or "", sender or "")
        label, score = nearest_centroid(vector, state.centroids)

        if label is None or score < self.confidence_threshold:
            return ClassificationResult(label=fallback_label(sender), score=score, fallback_used=True)

        return ClassificationResult(label=label, score=score)

    def classify_batch(
        self, items: Iterable[Union[ClassifyRequest, Mapping[str, Any]]]
    ) -> List[ClassificationResult]:
        """Classify several messages against the same model snapshot."""
        results = []
        for item in items:
            request = item if isinstance(item, ClassifyRequest) else ClassifyRequest.model_validate(item)
            results.append(self.classify(request.subject, request.sender, request.body))
        return results

    # ------------------------------------------------------------------
    # Incremental learning
    # ------------------------------------------------------------------

    def _usable_emails(
        self, emails: Iterable[Union[LabeledEmail, Mapping[str, Any]]]
    ) -> List[LabeledEmail]:
        usable = []
        malformed = 0
        for email in emails:
            if not isinstance(email, LabeledEmail):
                try:
                    email = LabeledEmail.model_validate(email)
                except ValidationError:
                    malformed += 1
                    continue
            if email.label and len(email.content) > self.learn_min_body_length:
                usable.append(email)

        if malformed:
            logger.warning("learn_emails_malformed", skipped=malformed)
        return usable

    def learn(self, emails: Iterable[Union[LabeledEmail, Mapping[str, Any]]]) -> int:
        """
        Blend centroids toward a batch of newly labeled emails.

        Emails are vectorized against the resident vocabulary, averaged per
        label, and blended as ``(1 - rate) * existing + rate * update``. A
        label not seen before takes the update centroid as is.

        Args:
            emails: Labeled emails (models or dicts with subject, sender,
                body or text, label)

        Returns:
            Number of emails that contributed to the update
        """
        usable = self._usable_emails(emails)
        if not usable:
            logger.debug("learn_skipped", reason="no labeled emails with a usable body")
            return 0

        with self._lock:
            state = self._state
            updates = compute_label_centroids(state.space, usable)
            centroids = dict(state.centroids)
            for label, update in updates.items():
                centroids[label] = blend_centroid(centroids.get(label), update, self.learning_rate)
            self._state = ModelState(space=state.space, centroids=centroids)

        logger.info(
            "learn_completed",
            emails=len(usable),
            labels=list(updates),
            learning_rate=self.learning_rate,
        )

        if self.persist_learned:
            if self.artifact_path or settings.model_path:
                self.save_model()
            else:
                logger.warning("learned_centroids_not_persisted", reason="no model path configured")

        return len(usable)

    def schedule_learn(self, emails: Iterable[Union[LabeledEmail, Mapping[str, Any]]]) -> Future:
        """
        Queue a learn batch without waiting for it.

        Batches run one at a time on a dedicated worker thread, in submission
        order. Classification keeps using the current centroids meanwhile.

        Returns:
            Future resolving to the number of emails used
        """
        batch = list(emails)
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="vsm-learn")
            future = self._executor.submit(self.learn, batch)
        future.add_done_callback(_log_learn_failure)
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop the learn worker, optionally draining queued batches."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


def _log_learn_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("learn_failed", error=str(exc), exc_info=exc)
