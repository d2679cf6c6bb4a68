"""
trio_loader — fetch one thing in the background, publish it on the main context.
"""

from trio_loader.config import LoaderConfig
from trio_loader.errors import BadURLError, FetchError, LoaderError, WrongContextError
from trio_loader.loader import ImageLoader, decode_image
from trio_loader.main_context import MainContext, describe_current_context, open_main_context
from trio_loader.results import Failure, FetchResult, Success, capture
from trio_loader.state import StateHolder
from trio_loader.titles import TitleDataManager
from trio_loader.viewmodels import ImageViewModel, TimelineViewModel, TitleViewModel

__version__ = "0.1.0"

__all__ = [
    "BadURLError",
    "Failure",
    "FetchError",
    "FetchResult",
    "ImageLoader",
    "ImageViewModel",
    "LoaderConfig",
    "LoaderError",
    "MainContext",
    "StateHolder",
    "Success",
    "TimelineViewModel",
    "TitleDataManager",
    "TitleViewModel",
    "WrongContextError",
    "capture",
    "decode_image",
    "describe_current_context",
    "open_main_context",
]
