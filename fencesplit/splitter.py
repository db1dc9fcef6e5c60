"""Fence-aware message splitting."""
from __future__ import annotations

from dataclasses import replace

from loguru import logger

from .config import SplitterConfig
from .scanning import (
    fence_start_spanning,
    find_last_newline,
    find_last_space,
    find_last_unclosed_code_block,
    find_next_closing_code_block,
)


class MessageSplitter:
    """Carve long messages into chunks that never break a ``` fence if avoidable.

    The splitter aims for ``max_len - code_block_buffer`` and prefers newline,
    then space/tab boundaries. When that cut would leave a code block open, the
    chunk is either extended (up to ``max_len``) to swallow the closing fence,
    or pulled back to before the opening fence so the whole block moves on to
    the next chunk.
    """

    def __init__(self, config: SplitterConfig | None = None) -> None:
        self.config = replace(config) if config is not None else SplitterConfig()
        self.config.validate()

    def split(self, content: str, max_len: int | None = None) -> list[str]:
        """Split ``content`` into chunks of at most ``max_len`` characters.

        Args:
            content: The message text to split.
            max_len: Maximum length of each chunk. Defaults to ``config.max_len``.

        Returns:
            The chunks in order. Empty content yields an empty list.

        Raises:
            ValueError: If ``max_len`` is not positive.
        """
        limit = self.config.max_len if max_len is None else max_len
        if limit <= 0:
            raise ValueError("max_len must be > 0")

        text = content or ""
        chunks: list[str] = []
        while text:
            if len(text) <= limit:
                chunks.append(text)
                break
            cut = self._find_cut(text, limit)
            chunks.append(text[:cut])
            text = text[cut:].strip()
        return chunks

    def _natural_break(self, text: str) -> int:
        cut = find_last_newline(text, self.config.newline_window)
        if cut <= 0:
            cut = find_last_space(text, self.config.space_window)
        if cut <= 0:
            cut = len(text)
        return cut

    def _find_cut(self, text: str, max_len: int) -> int:
        effective_limit = self.config.effective_limit(max_len)
        cut = self._natural_break(text[:effective_limit])
        if cut == effective_limit:
            logger.debug("No natural break before {}, hard cut", effective_limit)

        open_at = find_last_unclosed_code_block(text[:cut])
        if open_at >= 0:
            close_end = find_next_closing_code_block(text, cut)
            if 0 < close_end <= max_len:
                logger.debug("Extending chunk from {} to {} to close code block", cut, close_end)
                cut = close_end
            else:
                # Closing fence out of reach: defer the block to the next chunk
                cut = self._natural_break(text[:open_at])
                logger.debug("Retreating chunk to {} before code block at {}", cut, open_at)

        if cut <= 0:
            logger.debug("Code block opens at start of chunk, cutting at {}", effective_limit)
            cut = effective_limit

        marker_at = fence_start_spanning(text, cut)
        if marker_at > 0:
            logger.debug("Moving cut from {} to {} to keep fence marker whole", cut, marker_at)
            cut = marker_at
        return cut


def split_message(
    content: str,
    max_len: int | None = None,
    *,
    config: SplitterConfig | None = None,
) -> list[str]:
    """Split ``content`` into fence-safe chunks. See :class:`MessageSplitter`."""
    return MessageSplitter(config).split(content, max_len)
