import json
import logging

import pytest

from imagetiler.logging import JSONFormatter, configure_logging


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.makeLogRecord(
        {"name": "imagetiler.test", "levelname": "INFO", "msg": "wrote tile", "path": "/tmp/tile_0_0_0.png"}
    )

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "wrote tile"
    assert payload["logger"] == "imagetiler.test"
    assert payload["path"] == "/tmp/tile_0_0_0.png"
    assert "levelno" not in payload


def test_configure_logging_scopes_level_to_package() -> None:
    configure_logging(level="debug")

    assert logging.getLogger("imagetiler").level == logging.DEBUG
    assert logging.getLogger("imagetiler.tiling.manager").isEnabledFor(logging.DEBUG)
    assert logging.getLogger().level == logging.WARNING
    assert not logging.getLogger("PIL.PngImagePlugin").isEnabledFor(logging.DEBUG)


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging(level="loud")
