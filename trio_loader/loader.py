"""
loader.py — Fetch one image over HTTP and report exactly one outcome.

`ImageLoader.fetch()` is the core: it downloads the configured URL, decodes
the body with Pillow on a worker thread, and returns a Success or a Failure.
The other entry points are thin shapes over the same work:

  download()               -> raises FetchError instead of returning Failure
  download_with_callback() -> hands the result to a completion callable
  stream()                 -> a receive channel that yields one result, then closes

None of them touch presentation state.  Whoever consumes the result is
responsible for posting it to the main context.
"""

import io
import logging

import httpx
import trio
from PIL import Image

from trio_loader.config import LoaderConfig
from trio_loader.errors import FetchError
from trio_loader.results import Failure, Success

logger = logging.getLogger(__name__)

# Pillow reports corrupt payloads with several exception types depending on
# the format and where the damage is: OSError (UnidentifiedImageError
# included), ValueError for a truncated IHDR or a bad PPM header,
# SyntaxError for a broken PNG chunk, EOFError for a short frame.
DECODE_ERRORS = (
    OSError,
    ValueError,
    SyntaxError,
    EOFError,
    Image.DecompressionBombError,
)


def decode_image(data):
    """Decode raw bytes into a fully loaded PIL image.

    Raises one of DECODE_ERRORS when the bytes are not an image Pillow
    understands.
    """
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


class ImageLoader:
    """Downloads a single image from `url`.

    The URL is only checked for well-formedness; a malformed one raises
    ValueError here rather than failing later inside a background task.

    Pass `client` to reuse an httpx.AsyncClient (the loader never closes a
    client it did not create); otherwise a short-lived client is opened for
    each download.
    """

    def __init__(self, url=None, client=None, config=None):
        self.config = config or LoaderConfig()
        self.url = url or self.config.image_url
        self._client = client
        try:
            httpx.URL(self.url)
        except httpx.InvalidURL as exc:
            raise ValueError(f"Not a well-formed URL: {self.url!r} ({exc})") from exc

    def image_from_response(self, response):
        """Turn a response into a decoded image, or raise FetchError.

        This is the single status-and-decode decision; download() runs it on a
        worker thread and handle_response() folds its error into None.
        """
        if not response.is_success:
            raise FetchError(
                f"{self.url} answered with HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return decode_image(response.content)
        except DECODE_ERRORS as exc:
            raise FetchError(
                f"{self.url} did not return a readable image: {exc}",
                status_code=response.status_code,
            ) from exc

    def handle_response(self, response):
        """Return the decoded image, or None for a non-2xx or undecodable response."""
        try:
            return self.image_from_response(response)
        except FetchError:
            return None

    async def _get(self):
        if self._client is not None:
            return await self._client.get(self.url)
        async with httpx.AsyncClient(
            timeout=self.config.timeout_s, follow_redirects=True
        ) as client:
            return await client.get(self.url)

    async def download(self):
        """Fetch and decode the image.  Every failure surfaces as FetchError."""
        try:
            response = await self._get()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"Could not load {self.url}: {exc}") from exc

        # Decoding is CPU work, so it leaves the trio thread; a FetchError
        # raised over there comes back out of run_sync unchanged.
        image = await trio.to_thread.run_sync(self.image_from_response, response)

        logger.debug("Decoded %sx%s image from %s", image.width, image.height, self.url)
        return image

    async def fetch(self):
        """Run one download and fold its outcome into a Success or Failure."""
        logger.info("Fetching %s", self.url)
        try:
            image = await self.download()
        except FetchError as exc:
            logger.warning("Fetch failed: %s", exc)
            return Failure(exc)
        return Success(image)

    # ─── Adapters ───────────────────────────────────────────────────────────

    async def download_with_callback(self, completion):
        """Call `completion(result)` once, from the task doing the download."""
        completion(await self.fetch())

    def stream(self, nursery):
        """Start a fetch on `nursery` and return a channel carrying its one result."""
        send_channel, receive_channel = trio.open_memory_channel(1)
        nursery.start_soon(self._publish, send_channel)
        return receive_channel

    async def _publish(self, send_channel):
        async with send_channel:
            result = await self.fetch()
            try:
                await send_channel.send(result)
            except trio.BrokenResourceError:
                logger.debug("Result for %s dropped: receiver already closed", self.url)
