import json

import structlog

from gamestore.config import Settings
from gamestore.core.logging import configure_logging


def test_production_logs_are_single_json_objects(capsys):
    configure_logging(Settings(_env_file=None, SECRET_KEY="key", ENVIRONMENT="production"))

    structlog.get_logger("gamestore.tests").info("Product created", product_id=1)

    lines = [line for line in capsys.readouterr().out.splitlines() if "Product created" in line]
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["event"] == "Product created"
    assert record["product_id"] == 1
    assert record["level"] == "info"
    assert record["logger"] == "gamestore.tests"
    assert "timestamp" in record


def test_stdlib_records_are_rendered_as_json(capsys):
    import logging

    configure_logging(Settings(_env_file=None, SECRET_KEY="key", ENVIRONMENT="production"))

    logging.getLogger("uvicorn.error").warning("Port %s busy", 5000)

    lines = [line for line in capsys.readouterr().out.splitlines() if "busy" in line]
    record = json.loads(lines[0])
    assert record["event"] == "Port 5000 busy"
    assert record["level"] == "warning"
