"""Optional process-wide MessagePipeline and the t() shortcut.

Applications that want a single translator reachable from anywhere install
one here; nothing in msgroute requires it. The holder is explicit: an
instance exists only after get_instance() or set_instance(), and
release_instance() drops it so the next get_instance() builds a new one.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

from msgroute.constants import CATCH_ALL_PATTERN, DEFAULT_LANGUAGE
from msgroute.localization.pipeline import MessagePipeline
from msgroute.localization.types import Category, CategoryPattern, LanguageCode, MessageKey

__all__ = ["get_instance", "release_instance", "set_instance", "t"]

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_instance: MessagePipeline | None = None


def get_instance(
    bindings: Mapping[CategoryPattern, Any] | None = None, **kwargs: Any
) -> MessagePipeline:
    """Return the installed pipeline, creating it on first call.

    Arguments are only used when the pipeline is created; later calls
    return the existing instance unchanged. Without bindings the new
    pipeline routes every category to an empty in-memory source, so
    messages come back formatted in the source language.

    Args:
        bindings: Pattern -> source bindings for the new pipeline
        **kwargs: Further MessagePipeline keyword arguments

    Returns:
        The process-wide MessagePipeline
    """
    global _instance  # noqa: PLW0603
    with _lock:
        if _instance is None:
            if bindings is None and "resolver" not in kwargs:
                bindings = {CATCH_ALL_PATTERN: {"type": "memory"}}
            _instance = MessagePipeline(bindings, **kwargs)
            logger.info("Installed default MessagePipeline: %r", _instance)
        elif bindings is not None or kwargs:
            logger.warning("Default MessagePipeline already installed; ignoring arguments")
        return _instance


def set_instance(pipeline: MessagePipeline) -> None:
    """Install pipeline as the process-wide instance, replacing any other."""
    global _instance  # noqa: PLW0603
    with _lock:
        _instance = pipeline
    logger.debug("Default MessagePipeline replaced")


def release_instance() -> None:
    """Drop the installed pipeline; the next get_instance() creates a new one."""
    global _instance  # noqa: PLW0603
    with _lock:
        _instance = None


def t(
    category: Category,
    message: MessageKey,
    params: object = None,
    language: LanguageCode | None = None,
) -> str:
    """Translate through the installed pipeline.

    Empty or None language means DEFAULT_LANGUAGE ("en_us").

    Raises:
        RuntimeError: If no pipeline is installed
        NoSourceForCategoryError: If no binding matches category
    """
    with _lock:
        pipeline = _instance
    if pipeline is None:
        msg = "No default MessagePipeline installed. Call get_instance() or set_instance() first."
        raise RuntimeError(msg)
    return pipeline.translate(category, message, params, language or DEFAULT_LANGUAGE)
