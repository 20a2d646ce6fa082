"""Orchestration of a transformation: provider call, history, comparison."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import uuid4

from humandiff import compare
from humandiff.data.history import HistoryStore
from humandiff.rewrite.provider import TransformationProvider
from humandiff.rewrite.settings import (
    TransformationRequest,
    TransformationResponse,
    now_millis,
)
from humandiff.text.cache import DiffCache
from humandiff.text.diff import LOOKAHEAD_WINDOW, DiffStats, Segment, summarize
from humandiff.text.render import render_html

logger = logging.getLogger(__name__)


@dataclass
class TransformationResult:
    """A transformation together with its comparison against the input."""

    response: TransformationResponse
    segments: List[Segment]
    stats: DiffStats = field(init=False)

    def __post_init__(self):
        self.stats = summarize(self.segments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transformation": self.response.model_dump(mode="json", by_alias=True),
            "segments": [segment.to_dict() for segment in self.segments],
            "stats": self.stats.to_dict(),
            "html": render_html(self.segments),
        }


class HumanizeService:
    """Runs transformations through a provider and compares the result.

    The provider is called first; if it fails, its TransformationError
    propagates and no comparison or history record is produced.
    """

    def __init__(
        self,
        provider: TransformationProvider,
        history: Optional[HistoryStore] = None,
        cache: Optional[DiffCache] = None,
        window: int = LOOKAHEAD_WINDOW,
    ):
        """Initialize the service.

        Args:
            provider: Backend that produces the transformed text
            history: Store for completed transformations (optional)
            cache: Memo for comparisons; a size-one cache is created by default
            window: Lookahead window passed to the alignment engine
        """
        self.provider = provider
        self.history = history
        self.window = window
        if cache is None:
            cache = DiffCache(
                compute=lambda original, transformed: compare(original, transformed, window=window)
            )
        self.cache = cache

    def diff(self, original: str, transformed: str) -> List[Segment]:
        """Compare two texts, reusing the cached result for an unchanged pair."""
        return self.cache.get(original, transformed)

    def transform(self, request: TransformationRequest) -> TransformationResult:
        """Transform text, record it in history and compare it with the input.

        Raises:
            ValueError: If the request text is blank
            TransformationError: If the provider fails
        """
        if not request.original_text.strip():
            raise ValueError("Text cannot be empty")

        humanized = self.provider.transform(request)
        response = TransformationResponse.from_request(
            id=str(uuid4()),
            request=request,
            humanized_text=humanized,
            timestamp=now_millis(),
        )

        if self.history is not None:
            if humanized.strip():
                self.history.append(response)
            else:
                logger.warning(f"Provider returned empty text for {response.id}, not stored")

        return TransformationResult(response, self.diff(request.original_text, humanized))

    def list_history(self, limit: Optional[int] = None) -> List[TransformationResponse]:
        if self.history is None:
            return []
        return self.history.list(limit=limit)

    def restore(self, id: str) -> TransformationResult:
        """Load a stored transformation and recompute its comparison.

        Raises:
            KeyError: If history is disabled or the record does not exist
        """
        if self.history is None:
            raise KeyError(id)
        response = self.history.get(id)
        return TransformationResult(
            response, self.diff(response.original_text, response.humanized_text)
        )

    def delete(self, id: str) -> bool:
        if self.history is None:
            return False
        return self.history.delete(id)
