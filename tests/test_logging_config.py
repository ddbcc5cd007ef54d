import logging

import logging_config


def test_setup_logging_installs_handlers_once(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(logging_config, "_initialized", False)
    monkeypatch.setattr(root, "handlers", [])

    logging_config.setup_logging(log_dir=tmp_path / "logs")
    logging_config.setup_logging(log_dir=tmp_path / "logs")

    assert len(root.handlers) == 2
    assert (tmp_path / "logs" / "whiteboard.log").exists()
    for handler in root.handlers:
        handler.close()
