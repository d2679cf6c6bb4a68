"""
__main__.py — Walk through every fetch-and-publish variant from a terminal.

Run with:  python -m trio_loader

Three demos run in order, each inside its own main context:
  1. Titles: the four error-handling styles, with the manager switched off.
  2. Timeline: delayed work hopping between background and main contexts.
  3. Image: one download, delivered by callback, by stream and by await.

Settings come from TRIO_LOADER_* environment variables (see config.py).
"""

import logging
import time

import trio

from trio_loader.config import LoaderConfig
from trio_loader.loader import ImageLoader
from trio_loader.main_context import open_main_context
from trio_loader.titles import TitleDataManager
from trio_loader.viewmodels import (
    TITLE_STYLES,
    ImageViewModel,
    TimelineViewModel,
    TitleViewModel,
)

logger = logging.getLogger("trio_loader")


def describe_image_state(view_model):
    if view_model.image is not None:
        image = view_model.image
        return f"{image.format or 'image'} {image.width}x{image.height}"
    if view_model.message is not None:
        return f"error: {view_model.message}"
    return "nothing yet"


# ─── SECTION 1: Error-handling styles ───────────────────────────────────────

async def demo_titles():
    print("Titles (manager inactive):")
    manager = TitleDataManager(is_active=False)
    async with open_main_context() as main:
        view_models = [TitleViewModel(main, manager, style) for style in TITLE_STYLES]
        for view_model in view_models:
            view_model.fetch_title()
    for view_model in view_models:
        print(f"  [{view_model.style:>8}] {view_model.text.value}")


# ─── SECTION 2: Context hopping with delays ─────────────────────────────────

async def demo_timeline(config):
    print(f"Timeline (delay {config.title_delay_s:.1f}s):")
    async with open_main_context() as main:
        view_model = TimelineViewModel(main, delay=config.title_delay_s)
        view_model.entries.subscribe(lambda entries: print(f"  + {entries[-1]}"))
        await view_model.add_author1()
        view_model.add_title1()
        view_model.add_title2()


# ─── SECTION 3: One image, three deliveries ─────────────────────────────────

async def demo_image(config):
    print(f"Image from {config.image_url}:")
    loader = ImageLoader(config=config)
    async with open_main_context() as main:
        view_model = ImageViewModel(main, loader)
        view_model.state.subscribe(
            lambda _: print(f"  state -> {describe_image_state(view_model)}")
        )
        view_model.fetch_image()
        view_model.fetch_image_from_stream()
        await view_model.fetch_image_async()
    print(f"  final: {describe_image_state(view_model)}")


async def main():
    config = LoaderConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("  trio_loader demo")
    print("=" * 60)
    start = time.perf_counter()

    await demo_titles()
    print()
    await demo_timeline(config)
    print()
    await demo_image(config)

    print()
    print(f"Finished in {time.perf_counter() - start:.2f}s.")
    print("=" * 60)


if __name__ == "__main__":
    trio.run(main)
