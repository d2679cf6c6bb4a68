"""
main_context.py — The single "main" context and the hop back onto it.

State that a presentation layer watches is mutated in exactly one place: the
drain task started by `open_main_context()`.  Work runs elsewhere (other trio
tasks, trio worker threads) and hands its outcome over by *posting* a
callable onto a memory channel.  The drain task is the channel's only
consumer, so posted callables run one at a time and in the order they were
posted.

    async with open_main_context() as main:
        main.start_background(do_work)       # runs on a background task
        main.post(holder.set, "done")        # runs on the main context

Leaving the `async with` block waits for background work, closes the
channel, and lets the drain task apply whatever is still queued.
"""

import logging
import math
import threading
from contextlib import asynccontextmanager

import trio

logger = logging.getLogger(__name__)

MAIN_TASK_NAME = "main-context"


def describe_current_context():
    """Return a short label for whatever is running the caller.

    Inside trio this is the current task's name (the drain task is
    "main-context"); in a worker thread it is "thread:<thread name>".
    """
    try:
        task = trio.lowlevel.current_task()
    except RuntimeError:
        return f"thread:{threading.current_thread().name}"
    return task.name


class MainContext:
    """Handle returned by `open_main_context()`."""

    def __init__(self, send_channel, receive_channel):
        self._send_channel = send_channel
        self._receive_channel = receive_channel
        self._task = None
        self._background = None

    # ─── Posting work onto the main context ─────────────────────────────────

    def post(self, fn, *args):
        """Queue `fn(*args)` to run on the main context.

        Callable from any trio task.  The channel is unbounded, so this
        never blocks; once the context has closed it raises
        trio.ClosedResourceError.
        """
        # Only the pair (fn, args) crosses over, not a call.  Nothing runs
        # here; the drain task picks the pair up later and makes the call
        # itself, which is what puts the mutation on the main context.
        self._send_channel.send_nowait((fn, args))

    def post_from_thread(self, fn, *args):
        """Same as `post`, from a thread started with trio.to_thread."""
        # A worker thread may not touch trio objects directly.  from_thread
        # asks the trio run loop to make the send_nowait() call on its behalf.
        trio.from_thread.run_sync(self.post, fn, *args)

    def post_after(self, delay, fn, *args):
        """Queue `fn(*args)` on the main context once `delay` seconds pass."""
        self.start_background(self._post_later, delay, fn, args)

    async def _post_later(self, delay, fn, args):
        await trio.sleep(delay)
        self.post(fn, *args)

    # ─── Background work ────────────────────────────────────────────────────

    def start_background(self, async_fn, *args, name=None):
        """Run `async_fn(*args)` on a background task."""
        if self._background is None:
            raise RuntimeError("main context is not open")
        self._background.start_soon(async_fn, *args, name=name)

    def is_main(self):
        """True when called from the drain task."""
        try:
            return trio.lowlevel.current_task() is self._task
        except RuntimeError:
            return False

    # ─── The drain loop ─────────────────────────────────────────────────────

    async def _drain(self, task_status=trio.TASK_STATUS_IGNORED):
        self._task = trio.lowlevel.current_task()
        task_status.started()
        applied = 0
        # This loop is the main context.  Posted callables run one at a time,
        # in the order they were sent, and never overlap with each other.
        # `async for` ends once the send side is closed and the buffer is empty.
        async with self._receive_channel:
            async for fn, args in self._receive_channel:
                fn(*args)
                applied += 1
        logger.debug("Main context drained %d posted callables", applied)


@asynccontextmanager
async def open_main_context():
    """Open a main context for the duration of an `async with` block."""
    send_channel, receive_channel = trio.open_memory_channel(math.inf)
    main = MainContext(send_channel, receive_channel)

    async with trio.open_nursery() as nursery:
        await nursery.start(main._drain, name=MAIN_TASK_NAME)
        # Closing the send end is what ends the drain loop, and it only
        # happens after every background task has finished posting.
        async with send_channel:
            async with trio.open_nursery() as background:
                main._background = background
                yield main
        main._background = None
