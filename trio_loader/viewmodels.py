"""
viewmodels.py — Presentation-agnostic view models.

Each view model owns one or more StateHolders bound to a MainContext.  Work
runs in the background; results are posted to the main context, which is
the only place holders are mutated.  Failures stop here: they are turned
into display strings and stored like any other state.
"""

import logging

import trio

from trio_loader.errors import LoaderError
from trio_loader.main_context import describe_current_context
from trio_loader.results import Failure, Success
from trio_loader.state import StateHolder
from trio_loader.titles import TitleDataManager

logger = logging.getLogger(__name__)

STARTING_TEXT = "Starting Text"
TITLE_STYLES = ("optional", "pair", "result", "raise")


def title_from_pair(pair, current):
    """Resolve a (title, error) pair into the text to display.

    The pair type allows illegal states.  A title wins over an error when
    both are set, and (None, None) leaves `current` untouched.
    """
    title, error = pair
    if title is not None:
        return title
    if error is not None:
        return str(error)
    return current


class TitleViewModel:
    """Shows a title fetched with one of the four error-handling styles."""

    def __init__(self, main, manager=None, style="raise"):
        if style not in TITLE_STYLES:
            raise ValueError(f"Unknown title style {style!r}; pick one of {TITLE_STYLES}")
        self._main = main
        self.manager = manager or TitleDataManager()
        self.style = style
        self.text = StateHolder(STARTING_TEXT, owner=main, name="text")

    def fetch_title(self):
        self._main.post(self._apply_title)

    def _apply_title(self):
        current = self.text.value
        if self.style == "optional":
            title = self.manager.get_title_optional()
            new_text = current if title is None else title
        elif self.style == "pair":
            new_text = title_from_pair(self.manager.get_title_pair(), current)
        elif self.style == "result":
            result = self.manager.get_title_result()
            new_text = result.value if isinstance(result, Success) else str(result.error)
        else:
            try:
                new_text = self.manager.get_title()
            except LoaderError as exc:
                new_text = str(exc)
        self.text.set(new_text)


class ImageViewModel:
    """Holds the outcome of the latest image fetch.

    `state` carries a Success, a Failure, or None before the first fetch
    completes.  The three fetch methods differ only in how they receive the
    loader's result; the last result posted wins.
    """

    def __init__(self, main, loader):
        self._main = main
        self._loader = loader
        self.state = StateHolder(None, owner=main, name="image")

    @property
    def image(self):
        result = self.state.value
        return result.value if isinstance(result, Success) else None

    @property
    def message(self):
        result = self.state.value
        return str(result.error) if isinstance(result, Failure) else None

    def _publish(self, result):
        # The hop: whichever task produced `result`, the state holder is
        # only touched later, when the main context runs state.set.
        self._main.post(self.state.set, result)

    # Escaping-callback style: the loader calls back from its own background
    # task, so the callback must not mutate state itself; it posts instead.
    def fetch_image(self):
        self._main.start_background(self._loader.download_with_callback, self._publish)

    # Stream style: consume the single-item channel the loader returns.
    def fetch_image_from_stream(self):
        self._main.start_background(self._consume_stream)

    async def _consume_stream(self):
        async with trio.open_nursery() as nursery:
            receive_channel = self._loader.stream(nursery)
            async with receive_channel:
                async for result in receive_channel:
                    self._publish(result)

    # Suspend/resume style: await the loader directly.
    async def fetch_image_async(self):
        self._publish(await self._loader.fetch())


class TimelineViewModel:
    """Collects labelled entries, each naming the context that produced it."""

    def __init__(self, main, delay=2.0):
        self._main = main
        self.delay = delay
        self.entries = StateHolder([], owner=main, name="entries")

    @staticmethod
    def _label(prefix):
        return f"{prefix}: {describe_current_context()}"

    def _append(self, *items):
        self.entries.update(lambda entries: entries + list(items))

    def add_title1(self):
        """Append "Title 1" on the main context after `delay` seconds."""
        self._main.post_after(self.delay, self._append_labelled, "Title 1")

    def _append_labelled(self, prefix):
        self._append(self._label(prefix))

    def add_title2(self):
        """Wait in the background, label "Title 2" on a worker thread, then
        append it together with "Title 3" on the main context."""
        self._main.start_background(self._title2_in_background)

    async def _title2_in_background(self):
        await trio.sleep(self.delay)
        # to_thread runs the labelling on a worker thread, the analogue of a
        # global dispatch queue.  The result comes back to this task, which
        # then posts the append to the main context.
        title = await trio.to_thread.run_sync(self._label, "Title 2")
        self._main.post(self._append_title2_and_3, title)

    def _append_title2_and_3(self, title):
        self._append(title, self._label("Title 3"))

    async def add_author1(self):
        author = self._label("Author 1")
        logger.debug("Labelled %r off the main context", author)
        self._main.post(self._append, author)
