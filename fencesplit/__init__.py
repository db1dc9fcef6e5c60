"""fencesplit package."""

from loguru import logger

from .config import SplitterConfig
from .delivery import deliver
from .splitter import MessageSplitter, split_message

# Silent when used as a library; the CLI turns logging back on.
logger.disable("fencesplit")

__version__ = "0.1.0"
__all__ = ["MessageSplitter", "SplitterConfig", "deliver", "split_message", "__version__"]
