# tests/test_logging.py
import json
import logging

from skill_installer.services.logging import setup_logging


def test_json_lines_to_file(tmp_path):
    logfile = tmp_path / "logs" / "installer.log"
    logger = setup_logging("INFO", logfile)
    try:
        logging.getLogger("skill_installer.installer").info("install.skills", extra={"extra": {"selected": ["a"]}})
        for h in logger.handlers:
            h.flush()
        lines = [json.loads(line) for line in logfile.read_text(encoding="utf-8").splitlines()]
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)

    rec = lines[-1]
    assert rec["msg"] == "install.skills"
    assert rec["logger"] == "skill_installer.installer"
    assert rec["level"] == "INFO"
    assert rec["selected"] == ["a"]
    assert rec["time"]


def test_level_filters_records(tmp_path):
    logfile = tmp_path / "installer.log"
    logger = setup_logging("WARNING", logfile)
    try:
        logging.getLogger("skill_installer.discovery").info("discovery.no_root")
        logging.getLogger("skill_installer.discovery").warning("discovery.fallback")
        for h in logger.handlers:
            h.flush()
        msgs = [json.loads(line)["msg"] for line in logfile.read_text(encoding="utf-8").splitlines()]
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
    assert msgs == ["discovery.fallback"]
