import json

import pytest

from mercury_config.storage.settings import CONFIG_FILE_NAME, SettingsStore


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "MercuryTrade"


@pytest.fixture
def store(config_dir):
    s = SettingsStore(config_dir=config_dir)
    s.load()
    return s


@pytest.fixture
def write_config(config_dir):
    """Write a raw app-config.json and return its path."""

    def _write(document):
        config_dir.mkdir(parents=True, exist_ok=True)
        path = config_dir / CONFIG_FILE_NAME
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


def read_config(config_dir):
    with open(config_dir / CONFIG_FILE_NAME, "r", encoding="utf-8") as f:
        return json.load(f)
