"""
Request controller: one submit affordance driving one request at a time.

The controller owns the session state and talks to two collaborators, a
transport (``HttpClient``) and a UI-state sink (anything satisfying
``UiSink``). All transitions happen on the asyncio loop thread.
"""
import asyncio
import logging
from enum import Enum
from typing import Optional, Protocol

from lengthen_cli.client import HttpClient
from lengthen_cli.errors import ApplicationError, LengthenError, TransportError
from lengthen_cli.utils import SubmissionParams

logger = logging.getLogger(__name__)

START_LABEL = "Shorten"
RESET_LABEL = "Do Another"


class SessionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMPLETED = "completed"


class UiSink(Protocol):
    def read_params(self) -> SubmissionParams: ...

    def set_output(self, value: str) -> None: ...

    def set_busy(self, busy: bool) -> None: ...

    def set_submit_label(self, label: str) -> None: ...

    def alert(self, message: str, detail: Optional[str] = None) -> None: ...


class RequestController:
    def __init__(self, http: HttpClient, ui: UiSink):
        self.http = http
        self.ui = ui
        self.state = SessionState.IDLE
        self._task: Optional[asyncio.Task] = None

    def on_submit_triggered(self) -> Optional[asyncio.Task]:
        """
        Handle a press of the submit affordance.

        Returns the dispatched request task, or None when nothing was sent.
        Must be called from inside a running event loop.
        """
        if self.state is SessionState.COMPLETED:
            self.reset()
            return None
        if self.state is SessionState.PENDING:
            logger.debug("Submit ignored, a request is already in flight")
            return None

        loop = asyncio.get_running_loop()
        self._set_state(SessionState.PENDING)
        self.ui.set_busy(True)
        params = self.ui.read_params()
        self._task = loop.create_task(self._submit(params))
        return self._task

    def reset(self):
        """Go back to a fresh input. Only meaningful once a result is shown."""
        if self.state is not SessionState.COMPLETED:
            return
        self._set_state(SessionState.IDLE)
        self.ui.set_output("")
        self.ui.set_busy(False)
        self.ui.set_submit_label(START_LABEL)

    async def wait(self):
        """Wait for the in-flight request, if any, to settle."""
        task = self._task
        if task is not None:
            await task

    async def aclose(self):
        await self.http.aclose()

    # ========== Internal helpers ==========
    async def _submit(self, params: SubmissionParams):
        try:
            result = await self.http.lengthen(params)
            short_code = result.unwrap()
        except LengthenError as e:
            self._fail(e)
            return
        except Exception as e:
            logger.error("Request to %s failed unexpectedly", self.http.origin, exc_info=True)
            self._fail(TransportError(repr(e)))
            return
        finally:
            self._task = None

        self._set_state(SessionState.COMPLETED)
        self.ui.set_busy(False)
        self.ui.set_output(self.http.result_url(short_code))
        self.ui.set_submit_label(RESET_LABEL)

    def _fail(self, error: LengthenError):
        self._set_state(SessionState.IDLE)
        self.ui.set_busy(False)
        detail = error.description if isinstance(error, ApplicationError) else None
        self.ui.alert(f"error: {error}", detail)

    def _set_state(self, state: SessionState):
        logger.debug("Session %s -> %s", self.state.value, state.value)
        self.state = state
