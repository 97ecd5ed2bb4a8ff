"""StdioServer — pumps newline-delimited JSON between stdio and the dispatcher.

Two workers share one unbounded FIFO queue:

1. The **reader** is a daemon thread that pulls lines from the (blocking)
   input stream, decodes each into a request and hands it to the event
   loop.  Undecodable lines are logged and dropped.  End of input, or a
   read error, enqueues the end-of-stream marker.
2. The **writer** coroutine dequeues requests strictly in order, awaits the
   dispatcher for each, then writes and flushes one UTF-8 response line
   before taking the next request.

The reader never blocks interpreter shutdown: if the writer fails, ``serve``
raises at once even while the reader is parked in ``readline``.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from typing import IO, TYPE_CHECKING, Any

from p4mcp.protocol.errors import INTERNAL_ERROR, MessageDecodeError
from p4mcp.protocol.models import ErrorResponse, decode_request

if TYPE_CHECKING:
    from p4mcp.protocol.dispatcher import MessageDispatcher
    from p4mcp.protocol.models import Request, Response

logger = logging.getLogger(__name__)

_END_OF_INPUT = object()


class StdioServer:
    """Serves one client over a pair of byte streams.

    Usage::

        server = StdioServer(dispatcher)          # defaults to stdin/stdout
        await server.serve()                      # returns at end of input
    """

    def __init__(
        self,
        dispatcher: MessageDispatcher,
        *,
        reader: IO[bytes] | None = None,
        writer: IO[bytes] | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._reader = reader if reader is not None else sys.stdin.buffer
        self._writer = writer if writer is not None else sys.stdout.buffer
        self.received = 0
        self.dropped = 0
        self.answered = 0

    async def serve(self) -> None:
        """Run until the input stream ends and every queued request is answered."""
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[Request | object] = asyncio.Queue()
        reader = threading.Thread(
            target=self._read_requests, args=(loop, queue), name="p4mcp-stdin", daemon=True
        )
        reader.start()
        await self._answer_requests(queue)
        logger.info(
            "Input closed: %d request(s) answered, %d line(s) dropped",
            self.answered,
            self.dropped,
        )

    def _read_requests(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[Any]) -> None:
        try:
            while True:
                try:
                    line = self._reader.readline()
                except (OSError, ValueError) as exc:
                    logger.error("Error reading input: %s", exc)
                    break
                if not line:
                    break
                if not line.strip():
                    continue
                try:
                    request = decode_request(line)
                except MessageDecodeError as exc:
                    self.dropped += 1
                    logger.warning("Dropping unparseable message: %s (%s)", _preview(line), exc.detail)
                    continue
                self.received += 1
                if not _post(loop, queue, request):
                    return
        finally:
            _post(loop, queue, _END_OF_INPUT)

    async def _answer_requests(self, queue: asyncio.Queue[Request | object]) -> None:
        while True:
            item = await queue.get()
            if item is _END_OF_INPUT:
                return
            response = await self._dispatch(item)  # type: ignore[arg-type]
            self._write(response)
            self.answered += 1

    async def _dispatch(self, request: Request) -> Response:
        try:
            return await self._dispatcher.handle(request)
        except Exception as exc:
            logger.exception("Dispatcher raised for %s (id=%r)", request.method, request.id)
            return ErrorResponse.build(request.id, INTERNAL_ERROR, f"Internal error: {exc}")

    def _write(self, response: Response) -> None:
        self._writer.write(_encode(response))
        self._writer.flush()


def _encode(response: Response) -> bytes:
    try:
        return (response.to_json() + "\n").encode("utf-8")
    except ValueError as exc:
        # UnicodeEncodeError and pydantic serialization errors both land here.
        logger.error("Cannot encode response (id=%r): %s", response.id, exc)
        fallback = ErrorResponse.build(response.id, INTERNAL_ERROR, "Internal error: response is not encodable")
        return (fallback.to_json() + "\n").encode("utf-8")


def _post(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[Any], item: object) -> bool:
    try:
        loop.call_soon_threadsafe(queue.put_nowait, item)
    except RuntimeError:
        # Event loop already closed; nobody is left to answer.
        return False
    return True


def _preview(line: bytes, limit: int = 200) -> str:
    text = line.decode(errors="replace").rstrip("\r\n")
    return text if len(text) <= limit else text[: limit - 3] + "..."
