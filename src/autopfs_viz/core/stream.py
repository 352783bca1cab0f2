"""Live status stream client.

Keeps a websocket open to ``<page path>/ws`` and mirrors the job's status
messages into a display. Lifecycle::

    CONNECTING -> OPEN -> CLOSED -> (sleep reconnect_delay) -> CONNECTING
                   |
                   +-> NAVIGATING   (job done, not in view mode; absorbing)

Any transport error closes the connection and falls into the reconnect
path. There is no backoff and no retry limit. Messages are accepted only if
their timestamp is strictly after the last accepted one, which suppresses
both duplicates and out-of-order deliveries.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, AsyncContextManager, AsyncIterator, Awaitable, Callable, Optional, Protocol, Union

import pydantic
import websockets
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator
from websockets.exceptions import WebSocketException

from autopfs_viz.core.config import StreamConfig
from autopfs_viz.core.location import is_view_mode, job_id, result_url, ws_url
from autopfs_viz.core.state import StateManager, StreamState
from autopfs_viz.models import JOB_STATE_DONE
from autopfs_viz.utils.errors import ErrorHandler
from autopfs_viz.utils.helpers import parse_timestamp

Frame = Union[str, bytes]
ConnectFn = Callable[[str], AsyncContextManager[AsyncIterator[Frame]]]
SleepFn = Callable[[float], Awaitable[Any]]


class StreamMessage(BaseModel):
    """One pushed status update: ``{"Time": ..., "Message": ..., "State": ...}``."""

    model_config = ConfigDict(populate_by_name=True)

    time: datetime = Field(alias="Time")
    message: str = Field(default="", alias="Message")
    state: str = Field(default="", alias="State")

    @field_validator("time", mode="before")
    @classmethod
    def _parse_time(cls, value: Any) -> datetime:
        parsed = parse_timestamp(value)
        if parsed is None:
            raise ValueError(f"invalid timestamp {value!r}")
        return parsed

    @field_validator("message", "state", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class StatusDisplay(Protocol):
    """Where the stream client writes what it accepts."""

    def append_line(self, line: str) -> None: ...

    def show_state(self, state: str) -> None: ...

    def show_connection(self, state: StreamState) -> None: ...


def format_message(message: StreamMessage) -> str:
    return f"{message.time.isoformat(timespec='seconds')}: {message.message}"


class StreamClient:
    """Websocket client for a job's status stream."""

    def __init__(
        self,
        page_url: str,
        state: StateManager,
        display: StatusDisplay,
        navigate: Callable[[str], Any],
        config: Optional[StreamConfig] = None,
        connect: Optional[ConnectFn] = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        """Initialize stream client.

        Args:
            page_url: Status page URL; the stream endpoint, job id and view
                mode are derived from it
            state: Shared application state
            display: Receives accepted lines, job state and connection state
            navigate: Called once with the result page URL when the job is done
            config: Stream configuration
            connect: Opens a connection (defaults to ``websockets.connect``)
            sleep: Reconnect timer (defaults to ``asyncio.sleep``)
        """
        self.page_url = page_url
        self.url = ws_url(page_url)
        self.view_mode = is_view_mode(page_url)
        self.state = state
        self.display = display
        self.navigate = navigate
        self.config = config or StreamConfig()
        self.connect = connect or self._default_connect
        self.sleep = sleep

    def _default_connect(self, url: str) -> AsyncContextManager[AsyncIterator[Frame]]:
        return websockets.connect(url, open_timeout=self.config.open_timeout)

    @property
    def navigating(self) -> bool:
        return self.state.stream_state is StreamState.NAVIGATING

    def _set_state(self, state: StreamState) -> None:
        self.state.set_stream_state(state)
        self.display.show_connection(state)

    async def run(self) -> None:
        """Connect, consume and reconnect until the job is done."""
        logger.info(f"Status stream for {self.url} (view mode: {self.view_mode})")
        while not self.navigating:
            await self._consume_once()
            if self.navigating:
                break
            self._set_state(StreamState.CLOSED)
            logger.debug(f"Reconnecting in {self.config.reconnect_delay}s")
            await self.sleep(self.config.reconnect_delay)

    async def _consume_once(self) -> None:
        """Run one connection until it closes, fails, or navigation begins."""
        self._set_state(StreamState.CONNECTING)
        try:
            async with self.connect(self.url) as ws:
                self._set_state(StreamState.OPEN)
                async for frame in ws:
                    self.handle_payload(frame)
                    if self.navigating:
                        return
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            ErrorHandler.log_and_continue(e, "status stream")

    def handle_payload(self, frame: Frame) -> bool:
        """Decode one frame and handle it; undecodable frames are dropped.

        Returns:
            True if the message was accepted
        """
        try:
            message = StreamMessage.model_validate_json(frame)
        except pydantic.ValidationError as e:
            logger.warning(f"could not unmarshal message {frame!r}: {e.error_count()} errors")
            return False
        return self.handle_message(message)

    def handle_message(self, message: StreamMessage) -> bool:
        """Apply one status message.

        Returns:
            True if the message was accepted, False if it was stale
        """
        if self.navigating:
            return False

        if message.time <= self.state.last_message:
            logger.trace(f"dropping stale message at {message.time}")
            return False

        self.state.last_message = message.time
        self.display.append_line(format_message(message))

        if message.state != self.state.displayed_state:
            self.state.displayed_state = message.state
            self.display.show_state(message.state)

        if message.state == JOB_STATE_DONE and not self.view_mode:
            self._begin_navigation()

        return True

    def _begin_navigation(self) -> None:
        target = result_url(self.page_url, job_id(self.page_url))
        self._set_state(StreamState.NAVIGATING)
        logger.info(f"Job done, navigating to {target}")
        self.navigate(target)
