from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

CONFIG_DIR = Path.home() / ".fencesplit"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.json"

DEFAULT_MAX_LEN = 2000
DEFAULT_CODE_BLOCK_BUFFER = 500
DEFAULT_NEWLINE_WINDOW = 200
DEFAULT_SPACE_WINDOW = 100


@dataclass(slots=True)
class SplitterConfig:
    """Policy knobs for :class:`fencesplit.splitter.MessageSplitter`.

    ``code_block_buffer`` is subtracted from ``max_len`` when looking for a
    natural break, leaving room to extend a chunk up to its closing fence.
    The two windows bound how far back a newline or space may be found.
    """

    max_len: int = DEFAULT_MAX_LEN
    code_block_buffer: int = DEFAULT_CODE_BLOCK_BUFFER
    newline_window: int = DEFAULT_NEWLINE_WINDOW
    space_window: int = DEFAULT_SPACE_WINDOW

    def effective_limit(self, max_len: int) -> int:
        return min(max(max_len - self.code_block_buffer, max_len // 2, 1), max_len)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SplitterConfig":
        defaults = cls()
        values: dict[str, int] = {}
        for f in fields(cls):
            raw = data.get(f.name, data.get(_camel(f.name)))
            values[f.name] = _as_int(raw, getattr(defaults, f.name))
        obj = cls(**values)
        obj.validate()
        return obj

    @classmethod
    def load(cls, path: str | Path = DEFAULT_CONFIG_PATH) -> "SplitterConfig":
        config_path = Path(path).expanduser()
        if not config_path.exists():
            return cls()

        raw = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"config at {config_path} must be a JSON object")
        return cls.from_dict(raw)

    def save(self, path: str | Path = DEFAULT_CONFIG_PATH) -> Path:
        config_path = Path(path).expanduser()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(self.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
        return config_path

    def validate(self) -> None:
        if self.max_len <= 0:
            raise ValueError("max_len must be > 0")
        if self.code_block_buffer < 0:
            raise ValueError("code_block_buffer must be >= 0")
        if self.newline_window <= 0:
            raise ValueError("newline_window must be > 0")
        if self.space_window <= 0:
            raise ValueError("space_window must be > 0")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _as_int(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
