from __future__ import annotations

from typing import Awaitable, Callable

from loguru import logger

from .config import SplitterConfig
from .splitter import MessageSplitter

ChunkSender = Callable[[str, int], Awaitable[None]]


async def deliver(
    content: str,
    send: ChunkSender,
    *,
    max_len: int | None = None,
    config: SplitterConfig | None = None,
) -> int:
    """Split ``content`` and hand each chunk to ``send(chunk, index)`` in order.

    Chunks are sent one at a time; the next is not started until the previous
    send has completed. A failing send propagates and stops delivery. Returns
    the number of chunks sent.
    """
    chunks = MessageSplitter(config).split(content, max_len)
    for i, chunk in enumerate(chunks):
        await send(chunk, i)
    if len(chunks) > 1:
        logger.debug("Delivered message in {} chunks", len(chunks))
    return len(chunks)
