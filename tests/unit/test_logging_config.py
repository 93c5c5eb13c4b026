"""
Tests pour la configuration loguru (console, fichier JSON, journal de scan).
"""

import json
from pathlib import Path

import pytest
from loguru import logger

from mediashelf.adapters.file_system import FileSystemAdapter
from mediashelf.logging_config import configure_logging
from mediashelf.services.scanner import DirectoryWalker
from mediashelf.utils.constants import SCAN_CHANNEL


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


class TestConfigureLogging:
    """Tests du fichier de log serialise."""

    def test_creates_log_directory(self, tmp_path: Path) -> None:
        log_file = tmp_path / "nested" / "logs" / "mediashelf.log"

        configure_logging(log_level="WARNING", log_file=log_file)

        assert log_file.parent.is_dir()

    def test_file_sink_is_json(self, tmp_path: Path) -> None:
        log_file = tmp_path / "mediashelf.log"
        configure_logging(log_level="ERROR", log_file=log_file)

        logger.info("Scan termine", candidates=3)
        logger.remove()

        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        scan = next(entry for entry in records if entry["record"]["message"] == "Scan termine")
        assert scan["record"]["extra"]["candidates"] == 3
        assert scan["record"]["level"]["name"] == "INFO"


class TestScanLog:
    """Tests du journal de scan dedie."""

    def test_scan_warnings_routed_to_scan_log(self, tmp_path: Path) -> None:
        log_file = tmp_path / "mediashelf.log"
        configure_logging(log_level="ERROR", log_file=log_file)

        logger.bind(channel=SCAN_CHANNEL).warning("Dossier ignore: /nas/offline")
        logger.warning("Avertissement hors scan")
        logger.remove()

        scan_log = (tmp_path / "scan.log").read_text(encoding="utf-8")
        assert "Dossier ignore: /nas/offline" in scan_log
        assert "Avertissement hors scan" not in scan_log

    def test_walker_warnings_reach_scan_log(self, tmp_path: Path) -> None:
        scan_log_file = tmp_path / "reports" / "walk.log"
        configure_logging(
            log_level="ERROR", log_file=tmp_path / "mediashelf.log", scan_log_file=scan_log_file
        )
        missing = str(tmp_path / "offline")

        list(DirectoryWalker(FileSystemAdapter()).walk([missing]))
        logger.remove()

        assert missing in scan_log_file.read_text(encoding="utf-8")
