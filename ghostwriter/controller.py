"""
Turn Controller - runs the human/AI writing loop.

Flow:
1. START - reset the session; the AI writes an opener (or, in free
   writing, the human starts)
2. AI TURN - request text sized by the length policy, stream it into the
   document
3. HUMAN TURN - the document opens for editing; the first real keystroke
   starts the countdown
4. TIME UP - measure what the human added; nothing added means the turn
   is retried in place, otherwise the AI writes next

Every piece of asynchronous work carries the GenerationToken of the session
generation that started it, so anything finishing after a restart is
discarded instead of applied.
"""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Set

from pydantic import ValidationError as PydanticValidationError

from .settings import SessionSettings
from .conversation_log import ConversationRecord, ConversationSink
from .document import UISink
from .exceptions import ProviderError, StaleResponseError, ValidationError
from .export import save_document
from .genres import is_free_writing, is_known_genre
from .length_policy import LENGTH_LABELS, ResponseLengthPolicy, describe_budget
from .logging_config import get_logger
from .prompts import build_request
from .providers import CompletionProvider
from .session import GenerationToken, Session, Turn, TurnState
from .streaming import StreamHandle, StreamingRenderer
from .timer import CountdownTimer
from .word_diff import HumanContribution, WordDiffEngine

logger = get_logger(__name__)

EMPTY_TURN_WARNING = "Please contribute something meaningful before the timer runs out!"

# (level, message) -> None; level is "info", "success", "warning" or "error"
NoticeCallback = Callable[[str, str], None]


class TurnController:
    """
    Owns one Session and drives the timer, the renderer and the provider.

    Only the controller writes to the document on the AI's behalf; the human
    can write only while the document is editable, which is only during a
    human turn.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        ui: UISink,
        settings: Optional[SessionSettings] = None,
        session: Optional[Session] = None,
        conversation_sink: Optional[ConversationSink] = None,
        timer: Optional[CountdownTimer] = None,
        renderer: Optional[StreamingRenderer] = None,
        length_policy: Optional[ResponseLengthPolicy] = None,
        diff_engine: Optional[WordDiffEngine] = None,
        notify: Optional[NoticeCallback] = None
    ):
        self.provider = provider
        self.ui = ui
        self.settings = settings or SessionSettings()
        self.session = session or Session(genre=self.settings.genre)
        self.conversation_sink = conversation_sink
        self.timer = timer or CountdownTimer(self.settings.timer_seconds)
        self.timer.on_expire = self._on_timer_expired
        self.renderer = renderer or StreamingRenderer(ui)
        self.length_policy = length_policy or ResponseLengthPolicy()
        self.diff_engine = diff_engine or WordDiffEngine()
        self.notify = notify
        self.last_error: Optional[ProviderError] = None

        self._stream: Optional[StreamHandle] = None
        self._turn_task: Optional[asyncio.Task] = None
        self._log_tasks: Set[asyncio.Task] = set()

    @property
    def state(self) -> TurnState:
        return self.session.state

    @property
    def pending_turn(self) -> Optional[asyncio.Task]:
        """Turn-end work scheduled by the timer, if any is still running."""
        if self._turn_task is not None and not self._turn_task.done():
            return self._turn_task
        return None

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def start(self, mode: Optional[str] = None) -> None:
        """
        Start (or restart) the session.

        Args:
            mode: Genre to write in; "freewriting" hands the first turn to
                  the human. Defaults to the configured genre.
        """
        genre = mode or self.settings.genre
        if not is_known_genre(genre):
            raise ValidationError(f"Unknown genre '{genre}'", field="genre")
        if genre != self.settings.genre:
            self.settings = self.settings.model_copy(update={"genre": genre})

        await self._cancel_stream()
        self.timer.stop()

        token = self.session.reset(genre)
        self.last_error = None
        self.timer.set_duration(self.settings.timer_seconds)
        self.timer.reset()
        self.ui.set_editable(False)
        self.ui.set_content("")
        logger.info(f"Starting new session {self.session.session_id} (genre={genre}, epoch={token.epoch})")

        if is_free_writing(genre):
            logger.info("Free Writing mode selected - user starts first")
            self._open_human_turn(token, typing=True)
            return

        await self._run_ai_turn(token)

    async def close(self) -> None:
        """Tear the session down: stop everything and flush pending logs."""
        await self._cancel_stream()
        self.timer.stop()
        self.session.close()
        self.ui.set_editable(False)
        if self._log_tasks:
            await asyncio.gather(*self._log_tasks, return_exceptions=True)
        logger.info(f"Session {self.session.session_id} closed")

    async def update_settings(self, **changes) -> SessionSettings:
        """
        Change session settings.

        Timer and length changes take effect at the next turn boundary (an
        idle timer shows the new duration at once); a genre change restarts
        the session.

        Raises:
            ValidationError: if the new settings are invalid
        """
        try:
            updated = SessionSettings(**{**self.settings.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

        previous, self.settings = self.settings, updated

        if updated.timer_seconds != previous.timer_seconds:
            logger.info(f"Timer duration changed to {updated.timer_seconds} seconds")
            if not self.timer.is_active():
                self.timer.set_duration(updated.timer_seconds)

        if updated.ai_length != previous.ai_length:
            self._notice("info", f"AI muse length set to: {LENGTH_LABELS[updated.ai_length]}")

        if updated.genre != previous.genre:
            logger.info(f"Genre changed to: {updated.genre}")
            await self.start(updated.genre)

        return updated

    def save(self, directory: Optional[Path] = None) -> Path:
        """Save the current document as a text file."""
        return save_document(self.ui.get_plain_text(), directory)

    # ------------------------------------------------------------------
    # Human turn
    # ------------------------------------------------------------------

    def notify_human_input(self) -> None:
        """
        Called by the UI whenever the document changes.

        The first change that adds non-whitespace text starts the countdown.
        """
        if self.session.state not in (TurnState.HUMAN_WAITING, TurnState.HUMAN_TYPING):
            return
        if self.timer.is_active():
            return

        baseline = self.session.snapshot_before_human_turn or ""
        if not self.diff_engine.diff(baseline, self.ui.get_plain_text()).strip():
            return

        if self.session.state is TurnState.HUMAN_WAITING:
            self.session.transition(TurnState.HUMAN_TYPING)
        logger.debug("First keystroke detected, starting timer")
        self.timer.start()

    async def submit_human_turn_end(self) -> Optional[HumanContribution]:
        """
        End the human turn (timer expiry, or forced by the front end).

        Returns:
            The measured contribution, or None if no human turn was open
        """
        if self.session.state not in (TurnState.HUMAN_WAITING, TurnState.HUMAN_TYPING):
            logger.debug(f"Not the human's turn ({self.session.state.value}), ignoring turn end")
            return None

        token = self.session.token
        self.session.transition(TurnState.HUMAN_TIMED_OUT)
        self.timer.stop()

        after = self.ui.get_plain_text()
        before = self.session.consume_snapshot()
        contribution = self.diff_engine.measure(before, after)

        if contribution.is_empty:
            self._notice("warning", EMPTY_TURN_WARNING)
            self.timer.set_duration(self.settings.timer_seconds)
            self.timer.reset()
            # The retried turn is measured against the same baseline
            self.session.capture_snapshot(before)
            self.session.transition(TurnState.HUMAN_WAITING)
            self.ui.focus_end()
            return contribution

        preview = contribution.text[:100] + ("..." if len(contribution.text) > 100 else "")
        self._notice("info", f'User added {contribution.word_count} words: "{preview}"')

        self.session.human_word_count = contribution.word_count
        self.session.document_text = after
        self.session.append(Turn.HUMAN, contribution.text)
        self.ui.set_editable(False)

        if self.settings.advance_delay:
            await asyncio.sleep(self.settings.advance_delay)
            if token.stale:
                return contribution

        await self._run_ai_turn(token, story_so_far=after)
        return contribution

    def _on_timer_expired(self) -> None:
        self._turn_task = asyncio.get_running_loop().create_task(self.submit_human_turn_end())
        self._turn_task.add_done_callback(self._turn_task_done)

    @staticmethod
    def _turn_task_done(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Turn transition failed: {error}", exc_info=error)

    def _open_human_turn(self, token: GenerationToken, typing: bool = False) -> None:
        if token.stale:
            logger.debug(f"Not opening human turn for stale generation {token.epoch}")
            return

        self.session.document_text = self.ui.get_plain_text()
        self.timer.set_duration(self.settings.timer_seconds)
        self.timer.reset()
        self.session.capture_snapshot(self.session.document_text)
        self.session.transition(TurnState.HUMAN_TYPING if typing else TurnState.HUMAN_WAITING)
        self.ui.set_editable(True)
        self.ui.focus_end()
        logger.info("Starting user's turn")

    # ------------------------------------------------------------------
    # AI turn
    # ------------------------------------------------------------------

    async def _run_ai_turn(self, token: GenerationToken, story_so_far: str = "") -> None:
        settings = self.settings
        opener = not story_so_far.strip()

        self.session.transition(TurnState.AI_REQUESTING)
        self.timer.reset()
        self.ui.set_editable(False)

        budget = self.length_policy.resolve(
            settings.ai_length,
            self.session.human_word_count,
            opener=opener
        )
        self._notice("info", describe_budget(settings.ai_length, budget, self.session.human_word_count))
        request = build_request(self.session.genre, budget, story_so_far)
        logger.info(
            f"Getting AI response for {self.session.genre} "
            f"({'new story' if opener else 'continuation'}, max_tokens={budget.max_tokens})"
        )

        try:
            response = await self.provider.complete(request)
        except ProviderError as e:
            await self.on_ai_response(token, error=e)
            return
        except Exception as e:
            logger.error(f"Unexpected provider failure: {e}", exc_info=True)
            await self.on_ai_response(token, error=ProviderError(str(e) or e.__class__.__name__))
            return

        await self.on_ai_response(token, text=response.text)

    async def on_ai_response(
        self,
        token: GenerationToken,
        text: Optional[str] = None,
        error: Optional[ProviderError] = None
    ) -> None:
        """
        Apply a provider result for the generation identified by `token`.

        Success streams the text and then opens the human turn; failure opens
        the human turn straight away so the session never stalls.
        """
        try:
            token.check()
        except StaleResponseError as e:
            logger.warning(f"Discarding stale AI response: {e.message}")
            return

        if error is not None:
            self.last_error = error
            message = f"Error: {error.message}"
            if error.suggestion:
                message += f" ({error.suggestion})"
            self._notice("error", message)
            self._open_human_turn(token)
            return

        # A pass from a superseded generation may still be unwinding
        await self.renderer.cancel()
        if token.stale:
            logger.warning(f"Generation {token.epoch} was superseded while waiting for the renderer")
            return

        text = text or ""
        self.session.append(Turn.AI, text)
        self._log_conversation()

        self.session.transition(TurnState.AI_STREAMING)
        self._stream = self.renderer.emit(
            text,
            self.settings.stream_interval_ms,
            on_complete=lambda: self._open_human_turn(token)
        )
        completed = await self._stream.wait()
        if completed:
            logger.debug("Emanation complete")

    async def _cancel_stream(self) -> None:
        self._stream = None
        await self.renderer.cancel()

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def _log_conversation(self) -> None:
        if self.conversation_sink is None:
            return

        record = ConversationRecord(
            conversation=self.session.history_as_dicts(),
            settings={
                "genre": self.session.genre,
                "timer": self.settings.timer_seconds,
                "aiLength": self.settings.ai_length.value,
            },
            metadata={
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "session_id": self.session.session_id,
                "epoch": self.session.epoch,
            }
        )
        task = asyncio.get_running_loop().create_task(self._deliver(record))
        self._log_tasks.add(task)
        task.add_done_callback(self._log_tasks.discard)

    async def _deliver(self, record: ConversationRecord) -> None:
        try:
            await self.conversation_sink.record(record)
        except Exception as e:
            logger.error(f"Error logging conversation: {e}", exc_info=True)

    def _notice(self, level: str, message: str) -> None:
        if level == "error":
            logger.error(message)
        elif level == "warning":
            logger.warning(message)
        else:
            logger.info(message)
        if self.notify:
            self.notify(level, message)
