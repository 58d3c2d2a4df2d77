"""
Session - the aggregate root of one writing session.

Holds the turn state, the conversation history, the last measured human
contribution, and the generation token that lets late provider responses
from a superseded session be recognised and dropped.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidTransitionError, StaleResponseError


class Turn(str, Enum):
    AI = "ai"
    HUMAN = "human"


class TurnState(str, Enum):
    IDLE = "idle"
    AI_REQUESTING = "ai_requesting"
    AI_STREAMING = "ai_streaming"
    HUMAN_WAITING = "human_waiting"
    HUMAN_TYPING = "human_typing"
    HUMAN_TIMED_OUT = "human_timed_out"
    CLOSED = "closed"


HUMAN_STATES: FrozenSet[TurnState] = frozenset({
    TurnState.HUMAN_WAITING,
    TurnState.HUMAN_TYPING,
    TurnState.HUMAN_TIMED_OUT,
})

# Reset (-> IDLE) and close (-> CLOSED) are allowed from anywhere and
# handled separately.
TRANSITIONS: Dict[TurnState, FrozenSet[TurnState]] = {
    TurnState.IDLE: frozenset({TurnState.AI_REQUESTING, TurnState.HUMAN_TYPING}),
    TurnState.AI_REQUESTING: frozenset({TurnState.AI_STREAMING, TurnState.HUMAN_WAITING}),
    TurnState.AI_STREAMING: frozenset({TurnState.HUMAN_WAITING}),
    TurnState.HUMAN_WAITING: frozenset({TurnState.HUMAN_TYPING, TurnState.HUMAN_TIMED_OUT}),
    TurnState.HUMAN_TYPING: frozenset({TurnState.HUMAN_TIMED_OUT}),
    TurnState.HUMAN_TIMED_OUT: frozenset({TurnState.HUMAN_WAITING, TurnState.AI_REQUESTING}),
    TurnState.CLOSED: frozenset(),
}


class ConversationEntry(BaseModel):
    """One contribution to the story. Immutable once appended."""
    model_config = ConfigDict(frozen=True)

    role: Turn
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GenerationToken:
    """
    Identifies one session generation.

    Work started on behalf of a generation (a provider call, a stream)
    carries its token; once the session resets, the token goes stale and
    the work's results are rejected.
    """

    def __init__(self, session: "Session", epoch: int):
        self._session = session
        self.epoch = epoch

    @property
    def stale(self) -> bool:
        return self._session.epoch != self.epoch or self._session.state is TurnState.CLOSED

    def check(self) -> None:
        if self.stale:
            raise StaleResponseError(self.epoch, self._session.epoch)

    def __repr__(self) -> str:
        return f"<GenerationToken epoch={self.epoch} stale={self.stale}>"


class Session:
    """
    State of one writing session.

    `turn` and `has_human_started_typing` are derived from the single
    `state` field, so they can never contradict each other.
    """

    def __init__(self, genre: str = "hardboiled", session_id: Optional[str] = None):
        self.session_id = session_id or f"session-{uuid.uuid4().hex[:12]}"
        self.genre = genre
        self.epoch = 0
        self.state = TurnState.IDLE
        self.document_text = ""
        self.human_word_count = 0
        self._history: List[ConversationEntry] = []
        self._snapshot: Optional[str] = None
        self.token = GenerationToken(self, self.epoch)

    @property
    def turn(self) -> Turn:
        return Turn.HUMAN if self.state in HUMAN_STATES else Turn.AI

    @property
    def has_human_started_typing(self) -> bool:
        return self.state is TurnState.HUMAN_TYPING

    @property
    def conversation_history(self) -> List[ConversationEntry]:
        return list(self._history)

    @property
    def snapshot_before_human_turn(self) -> Optional[str]:
        return self._snapshot

    def reset(self, genre: Optional[str] = None) -> GenerationToken:
        """Clear document and history and start a new generation."""
        if genre is not None:
            self.genre = genre
        self.epoch += 1
        self.state = TurnState.IDLE
        self.document_text = ""
        self.human_word_count = 0
        self._history = []
        self._snapshot = None
        self.token = GenerationToken(self, self.epoch)
        return self.token

    def close(self) -> None:
        self.epoch += 1
        self.state = TurnState.CLOSED
        self._snapshot = None

    def transition(self, target: TurnState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(self.state.value, target.value)
        self.state = target

    def append(self, role: Turn, content: str) -> ConversationEntry:
        entry = ConversationEntry(role=role, content=content)
        self._history.append(entry)
        return entry

    def capture_snapshot(self, text: str) -> None:
        """Record the plain text at the instant a human turn opens."""
        self._snapshot = text

    def consume_snapshot(self) -> str:
        """Read the turn's baseline; it is cleared so it cannot be read twice."""
        snapshot, self._snapshot = self._snapshot, None
        return snapshot or ""

    def history_as_dicts(self) -> List[dict]:
        return [entry.model_dump(mode="json") for entry in self._history]

    def __repr__(self) -> str:
        return (
            f"<Session {self.session_id} genre={self.genre} state={self.state.value} "
            f"epoch={self.epoch} entries={len(self._history)}>"
        )
