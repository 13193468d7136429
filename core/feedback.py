"""
core/feedback.py
────────────────────────────────────────────────────────────────────────
Like / dislike bookkeeping for one rendered set of meals.

Indices are positions in the current meal list.  A board belongs to a
single result set: render new meals → start a new board.  Nothing here is
sent upstream; actions are only logged.

    neutral|disliked ──like──────────────────────────▶ liked
    neutral|liked    ──request_dislike → confirm────▶ disliked
                          └─ cancel ─▶ (unchanged)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Set

_LOG = logging.getLogger(__name__)


class FeedbackState(str, Enum):
    neutral = "neutral"
    liked = "liked"
    disliked = "disliked"


@dataclass
class FeedbackBoard:
    liked: Set[int] = field(default_factory=set)
    disliked: Set[int] = field(default_factory=set)
    pending_dislike: int | None = None

    # ─────────────────────────────── queries ──────────────────────── #
    def state_of(self, index: int) -> FeedbackState:
        if index in self.liked:
            return FeedbackState.liked
        if index in self.disliked:
            return FeedbackState.disliked
        return FeedbackState.neutral

    # ─────────────────────────────── actions ──────────────────────── #
    def like(self, index: int) -> None:
        self.disliked.discard(index)
        self.liked.add(index)
        _LOG.info("Meal %d liked", index)

    def request_dislike(self, index: int) -> None:
        """Open the confirmation dialog; state changes only on confirm."""
        self.pending_dislike = index

    def confirm_dislike(self, reason: str | None = None) -> None:
        if self.pending_dislike is None:
            return
        index = self.pending_dislike
        self.pending_dislike = None
        self.liked.discard(index)
        self.disliked.add(index)
        _LOG.info("Meal %d disliked (reason: %s)", index, (reason or "").strip() or "-")

    def cancel_dislike(self) -> None:
        self.pending_dislike = None

    def regenerate(self, index: int) -> None:
        # TODO: call the webhook for a single replacement meal once it exposes one
        _LOG.info("Regenerate requested for meal %d", index)

    def reset(self) -> None:
        self.liked.clear()
        self.disliked.clear()
        self.pending_dislike = None

    # ─────────────────────────── (de)serialise ────────────────────── #
    def to_dict(self) -> dict[str, Any]:
        return {
            "liked": sorted(self.liked),
            "disliked": sorted(self.disliked),
            "pending_dislike": self.pending_dislike,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "FeedbackBoard":
        data = data or {}
        liked = {int(i) for i in data.get("liked", [])}
        disliked = {int(i) for i in data.get("disliked", [])} - liked
        pending = data.get("pending_dislike")
        return cls(
            liked=liked,
            disliked=disliked,
            pending_dislike=int(pending) if pending is not None else None,
        )
