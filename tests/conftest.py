import logging
from pathlib import Path

import pytest


@pytest.fixture
def logger(caplog) -> logging.Logger:
    caplog.set_level(logging.DEBUG)
    return logging.getLogger("tests.machinekeysync")


@pytest.fixture
def keys_dir(tmp_path) -> Path:
    directory = tmp_path / "Microsoft" / "Crypto" / "Keys"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def write_key(keys_dir):
    def _write(name: str, content: bytes = b"key material") -> Path:
        path = keys_dir / name
        path.write_bytes(content)
        return path

    return _write
