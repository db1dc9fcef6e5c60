import json
from pathlib import Path

import pytest

from fencesplit.config import SplitterConfig


def test_defaults() -> None:
    cfg = SplitterConfig()
    assert cfg.max_len == 2000
    assert cfg.code_block_buffer == 500
    assert cfg.newline_window == 200
    assert cfg.space_window == 100


def test_effective_limit_is_floored_at_half() -> None:
    cfg = SplitterConfig()
    assert cfg.effective_limit(2000) == 1500
    assert cfg.effective_limit(600) == 300
    assert cfg.effective_limit(1) == 1


def test_effective_limit_never_exceeds_max_len() -> None:
    assert SplitterConfig(code_block_buffer=-100).effective_limit(400) == 400


def test_config_roundtrip(tmp_path: Path) -> None:
    cfg = SplitterConfig(max_len=1900, code_block_buffer=300, newline_window=150, space_window=50)
    path = tmp_path / "nested" / "config.json"
    cfg.save(path)
    assert SplitterConfig.load(path) == cfg


def test_load_missing_file_returns_defaults(tmp_path: Path) -> None:
    assert SplitterConfig.load(tmp_path / "missing.json") == SplitterConfig()


def test_from_dict_accepts_camel_case_and_ignores_unknown_keys() -> None:
    cfg = SplitterConfig.from_dict({"maxLen": "4096", "codeBlockBuffer": 0, "theme": "dark"})
    assert cfg.max_len == 4096
    assert cfg.code_block_buffer == 0
    assert cfg.newline_window == 200


def test_from_dict_falls_back_on_garbage_values() -> None:
    cfg = SplitterConfig.from_dict({"space_window": "lots"})
    assert cfg.space_window == 100


def test_load_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(ValueError, match="JSON object"):
        SplitterConfig.load(path)


def test_validate_rejects_bad_values() -> None:
    with pytest.raises(ValueError, match="max_len"):
        SplitterConfig(max_len=0).validate()
    with pytest.raises(ValueError, match="code_block_buffer"):
        SplitterConfig(code_block_buffer=-1).validate()
    with pytest.raises(ValueError, match="newline_window"):
        SplitterConfig(newline_window=0).validate()
    with pytest.raises(ValueError, match="space_window"):
        SplitterConfig.from_dict({"space_window": -3})
