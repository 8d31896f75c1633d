import logging

from mercury_config.app import create_store, main
from mercury_config.storage.settings import CONFIG_DIR_ENV, CONFIG_FILE_NAME


def test_create_store_loads(tmp_path):
    store = create_store(config_dir=tmp_path)
    assert store.is_loaded
    assert (tmp_path / CONFIG_FILE_NAME).exists()


def test_create_store_survives_corrupt_file(tmp_path, caplog):
    (tmp_path / CONFIG_FILE_NAME).write_text("{{{", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        store = create_store(config_dir=tmp_path)
    assert store.min_opacity == 100
    assert "Running with default settings" in caplog.text


def test_main_uses_environment_config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    monkeypatch.setattr("sys.argv", ["mercury-config"])
    main()
    assert (tmp_path / CONFIG_FILE_NAME).exists()
    assert (tmp_path / "temp").is_dir()
