"""
Roundtable orchestrator: the turn-scheduling state machine.

This module runs sweeps over the fixed participant order, threads the shared
history into every provider call, paces delivery for readability, loops
indefinitely in auto-continue mode and honours cooperative stop requests.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from core.settings import (
    CLEAR_MARKER_TEXT,
    CONTINUATION_PROMPT,
    FALLBACK_REPLY_TEXT,
    PROVIDER_ERROR_NOTICE,
    STOP_NOTICE_TEXT,
)
from domain import Participant, Turn
from exceptions import ConfigurationError, ProviderError
from providers.base import ResponseProvider

from .cancellation import CancellationToken
from .pacing import PacingPolicy
from .registry import ParticipantRegistry
from .session import RoundtableSession
from .sinks import PresentationSink

logger = logging.getLogger("RoundtableOrchestrator")

SleepFunc = Callable[[float], Awaitable[None]]


def compose_turn_content(participant: Participant, text: str) -> str:
    """Persisted form of a reply; later participants see who said what inline."""
    return f"{participant.display_name} said: {text}"


class RoundtableOrchestrator:
    """
    Sequences participant turns over one shared transcript.

    Only one sweep chain runs at a time. Submissions arriving while a chain is
    running are rejected, not queued. Stop requests are sampled before each
    participant and before each sweep; an in-flight provider call always runs
    to completion.
    """

    def __init__(
        self,
        registry: ParticipantRegistry,
        provider: ResponseProvider,
        sink: Optional[PresentationSink] = None,
        pacing: Optional[PacingPolicy] = None,
        session: Optional[RoundtableSession] = None,
        sleep: Optional[SleepFunc] = None,
        fallback_text: str = FALLBACK_REPLY_TEXT,
        continuation_prompt: str = CONTINUATION_PROMPT,
    ):
        if not fallback_text.strip():
            raise ConfigurationError("Fallback reply text must not be blank")

        self.registry = registry
        self.provider = provider
        self.sink = sink or PresentationSink()
        self.pacing = pacing or PacingPolicy()
        self.session = session or RoundtableSession()
        self.fallback_text = fallback_text
        self.continuation_prompt = continuation_prompt
        self._sleep = sleep or asyncio.sleep
        # Background chain started through start_user_message()
        self.active_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def is_generating(self) -> bool:
        return self.session.generating

    @property
    def cancel_requested(self) -> bool:
        return self.session.cancel_requested

    @property
    def auto_continue(self) -> bool:
        return self.session.auto_continue

    def history_snapshot(self):
        return self.session.history.snapshot()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def submit_user_message(self, content: str) -> bool:
        """
        Append a user message and run the resulting sweep chain to completion.

        Returns:
            False if the message was rejected (blank, or a chain is already running)
        """
        token = self._accept(content)
        if token is None:
            return False
        await self._run_sweep_chain(token)
        return True

    def start_user_message(self, content: str) -> bool:
        """
        Same acceptance rules as submit_user_message, but the sweep chain runs
        as a background task so the caller returns immediately.

        Raises:
            RuntimeError: If called outside a running event loop (nothing is accepted)
        """
        # Fail before _accept() marks the session busy
        loop = asyncio.get_running_loop()
        token = self._accept(content)
        if token is None:
            return False
        self.active_task = loop.create_task(self._run_sweep_chain(token))
        return True

    def request_stop(self) -> bool:
        """
        Ask the running chain to stop before the next participant.

        Auto-continue is switched off as well. The request stays visible through
        cancel_requested until the next accepted submission.

        Returns:
            False if no chain is running
        """
        if not self.session.generating:
            logger.debug("Stop requested while idle, ignoring")
            return False

        self.session.cancel_token.cancel()
        self.session.auto_continue = False
        logger.info("🛑 STOP REQUESTED | remaining turns will be skipped")
        self.sink.on_stop_available(False)
        self.sink.on_system_notice(STOP_NOTICE_TEXT)
        return True

    def set_auto_continue(self, enabled: bool) -> None:
        self.session.auto_continue = bool(enabled)
        logger.info(f"🔁 Auto-continue {'enabled' if enabled else 'disabled'}")
        if self.session.generating:
            self.sink.on_stop_available(bool(enabled))

    def reset(self) -> bool:
        """
        Clear the transcript, leaving one marker turn.

        Returns:
            False if a chain is running (the transcript is left untouched)
        """
        if self.session.generating:
            logger.warning("⚠️ Reset rejected: a sweep chain is running")
            return False

        self.session.history.reset(Turn.marker(CLEAR_MARKER_TEXT))
        logger.info("🧹 History reset")
        self.sink.on_cleared()
        return True

    async def shutdown(self, timeout: float = 5.0) -> None:
        """
        Stop the background chain, waiting up to `timeout` before cancelling it.
        """
        task = self.active_task
        if task is None or task.done():
            return

        logger.info("🛑 Shutting down orchestrator with an active sweep chain")
        self.request_stop()
        done, pending = await asyncio.wait({task}, timeout=timeout)
        if pending:
            logger.warning(f"⚠️ Sweep chain did not finish within {timeout}s, cancelling")
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass  # Expected
        self.active_task = None
        logger.info("✅ Orchestrator shutdown complete")

    # ------------------------------------------------------------------
    # Sweep chain
    # ------------------------------------------------------------------

    def _accept(self, content: str) -> Optional[CancellationToken]:
        text = (content or "").strip()
        if not text:
            logger.debug("Rejected blank submission")
            return None
        if self.session.generating:
            logger.info("⏳ Rejected submission: roundtable is still generating")
            return None

        token = self.session.begin_chain()
        self.session.history.append(Turn.from_user(text))
        logger.info(f"🔵 USER MESSAGE ACCEPTED | {text[:50]}")
        self.sink.on_user_message_appended(text)
        self.sink.on_generation_started(self.session.auto_continue)
        return token

    async def _run_sweep_chain(self, token: CancellationToken) -> None:
        """
        Run sweeps until the chain ends. Never raises (except task cancellation).
        """
        sweeps = 0
        try:
            while True:
                sweeps += 1
                delivered = await self._run_sweep(token, sweeps)
                logger.info(f"✅ Sweep {sweeps} complete | delivered: {delivered}/{len(self.registry)}")

                if token.is_cancelled or not self.session.auto_continue:
                    break

                await self._sleep(self.pacing.continue_delay)
                self.session.history.append(Turn.from_user(self.continuation_prompt))
                logger.info(f"🔁 Auto-continue: starting sweep {sweeps + 1}")
        except Exception:
            logger.exception("💥 Unexpected error in sweep chain")
        finally:
            self.session.generating = False
            self.sink.on_generation_finished()
            logger.info(f"🏁 Sweep chain finished after {sweeps} sweep(s) | stopped: {token.is_cancelled}")

    async def _run_sweep(self, token: CancellationToken, sweep_number: int = 1) -> int:
        """
        One pass over the participants in seating order.

        Returns:
            Number of replies delivered
        """
        delivered = 0
        for participant in self.registry.list():
            if token.is_cancelled:
                logger.info(f"⏹️  Sweep {sweep_number} stopped before {participant.display_name}")
                break
            if await self._take_turn(participant):
                delivered += 1
        return delivered

    async def _take_turn(self, participant: Participant) -> bool:
        """
        Ask one participant for a reply, publish it and pace.

        Returns:
            True if a reply was appended to the history
        """
        self.sink.on_typing_start(participant.id)
        snapshot = self.session.history.snapshot()

        try:
            text = await self.provider.generate(participant.id, snapshot)
        except ProviderError as e:
            logger.warning(f"❌ {participant.display_name} failed: {e}")
            return await self._fail_turn(participant)
        except ConfigurationError:
            logger.exception(f"💥 Configuration defect while asking {participant.id}")
            return await self._fail_turn(participant)
        except Exception:
            logger.exception(f"💥 Unexpected provider error from {participant.display_name}")
            return await self._fail_turn(participant)

        if not text or not text.strip():
            logger.warning(f"Empty response from {participant.display_name}, using fallback.")
            text = self.fallback_text

        self.session.history.append(Turn(speaker=participant.id, content=compose_turn_content(participant, text)))
        self.sink.on_message_delivered(participant.id, text)
        self.sink.on_typing_stop(participant.id)
        logger.info(f"💬 {participant.display_name} replied ({len(text)} chars)")

        await self._sleep(self.pacing.reading_delay(text))
        return True

    async def _fail_turn(self, participant: Participant) -> bool:
        # Failed turns are shown but never become context for later participants
        self.sink.on_error(participant.id, PROVIDER_ERROR_NOTICE)
        self.sink.on_typing_stop(participant.id)
        await self._sleep(self.pacing.failure_delay)
        return False
