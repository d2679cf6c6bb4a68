import httpx
import pytest
import trio

from trio_loader.config import LoaderConfig
from trio_loader.errors import FetchError
from trio_loader.loader import ImageLoader
from trio_loader.results import Failure, Success


def run_with_loader(make_client, handler, url, fn):
    """Run `fn(loader)` under trio with a loader wired to `handler`."""

    async def scenario():
        async with make_client(handler) as client:
            return await fn(ImageLoader(url, client=client))

    return trio.run(scenario)


async def fetch(loader):
    return await loader.fetch()


def test_url_defaults_to_config():
    config = LoaderConfig(image_url="https://example.test/x.png")
    assert ImageLoader(config=config).url == "https://example.test/x.png"
    assert ImageLoader("https://other.test/y.png", config=config).url == "https://other.test/y.png"


def test_successful_fetch_decodes_image(make_client, png_bytes, image_url):
    requested = []

    def handler(request):
        requested.append(str(request.url))
        return httpx.Response(200, content=png_bytes)

    result = run_with_loader(make_client, handler, image_url, fetch)
    assert isinstance(result, Success)
    assert result.value.size == (2, 3)
    assert requested == [image_url]


def test_transport_failure_becomes_fetch_error(make_client, image_url):
    def handler(request):
        raise httpx.ConnectError("network is unreachable", request=request)

    result = run_with_loader(make_client, handler, image_url, fetch)
    assert isinstance(result, Failure)
    assert isinstance(result.error, FetchError)
    assert result.error.status_code is None
    assert str(result.error)


def test_bad_status_is_same_failure_category(make_client, image_url):
    result = run_with_loader(
        make_client, lambda request: httpx.Response(404), image_url, fetch
    )
    assert isinstance(result, Failure)
    assert type(result.error) is FetchError
    assert result.error.status_code == 404
    assert "404" in str(result.error)


def test_undecodable_body_is_fetch_error(make_client, image_url):
    result = run_with_loader(
        make_client,
        lambda request: httpx.Response(200, content=b"definitely not a png"),
        image_url,
        fetch,
    )
    assert isinstance(result, Failure)
    assert isinstance(result.error, FetchError)
    assert result.error.status_code == 200


def test_download_raises_instead_of_returning_failure(make_client, image_url):
    async def download(loader):
        with pytest.raises(FetchError) as excinfo:
            await loader.download()
        return excinfo.value

    error = run_with_loader(
        make_client, lambda request: httpx.Response(503), image_url, download
    )
    assert error.status_code == 503


def test_callback_is_called_exactly_once(make_client, png_bytes, image_url):
    calls = []

    async def with_callback(loader):
        await loader.download_with_callback(calls.append)

    run_with_loader(
        make_client, lambda request: httpx.Response(200, content=png_bytes), image_url, with_callback
    )
    assert len(calls) == 1
    assert isinstance(calls[0], Success)


def test_stream_yields_one_result_then_closes(make_client, image_url):
    async def collect(loader):
        received = []
        async with trio.open_nursery() as nursery:
            receive_channel = loader.stream(nursery)
            async with receive_channel:
                async for result in receive_channel:
                    received.append(result)
        return received

    received = run_with_loader(
        make_client, lambda request: httpx.Response(500), image_url, collect
    )
    assert len(received) == 1
    assert isinstance(received[0], Failure)


def test_stream_tolerates_a_receiver_that_left(make_client, png_bytes, image_url):
    async def abandon(loader):
        async with trio.open_nursery() as nursery:
            receive_channel = loader.stream(nursery)
            await receive_channel.aclose()
        return "done"

    assert run_with_loader(
        make_client, lambda request: httpx.Response(200, content=png_bytes), image_url, abandon
    ) == "done"


def test_handle_response_returns_none_on_any_problem(png_bytes):
    loader = ImageLoader("https://example.test/")
    assert loader.handle_response(httpx.Response(200, content=png_bytes)).size == (2, 3)
    assert loader.handle_response(httpx.Response(302, content=png_bytes)) is None
    assert loader.handle_response(httpx.Response(200, content=b"")) is None


def test_truncated_header_is_fetch_error(make_client, truncated_png_bytes, image_url):
    result = run_with_loader(
        make_client,
        lambda request: httpx.Response(200, content=truncated_png_bytes),
        image_url,
        fetch,
    )
    assert isinstance(result, Failure)
    assert isinstance(result.error, FetchError)
    assert result.error.status_code == 200


def test_handle_response_and_download_agree_on_bad_header(truncated_png_bytes):
    loader = ImageLoader("https://example.test/")
    assert loader.handle_response(httpx.Response(200, content=truncated_png_bytes)) is None
    with pytest.raises(FetchError):
        loader.image_from_response(httpx.Response(200, content=truncated_png_bytes))


def test_malformed_url_is_rejected_up_front():
    with pytest.raises(ValueError, match="well-formed"):
        ImageLoader("http://[::1")


def test_malformed_url_set_later_still_fails_cleanly(make_client, png_bytes, image_url):
    async def broken_url(loader):
        loader.url = "http://[::1"
        return await loader.fetch()

    result = run_with_loader(
        make_client, lambda request: httpx.Response(200, content=png_bytes), image_url, broken_url
    )
    assert isinstance(result, Failure)
    assert isinstance(result.error, FetchError)
    assert result.error.status_code is None
