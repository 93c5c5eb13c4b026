"""
Configuration loguru de MediaShelf.

Trois sorties:
- console : niveau choisi en ligne de commande (-v, -q)
- fichier JSON : tous les niveaux, avec rotation
- journal de scan : dossiers ignores et echecs de matching, en texte
  brut, pour relire ce qui a ete saute lors des parcours

Les services marquent leurs messages de scan avec SCAN_CHANNEL:
    logger.bind(channel=SCAN_CHANNEL).warning("Dossier ignore: ...")
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from mediashelf.utils.constants import SCAN_CHANNEL

SCAN_LOG_NAME = "scan.log"


def _is_scan_record(record: dict) -> bool:
    return record["extra"].get("channel") == SCAN_CHANNEL


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/mediashelf.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    scan_log_file: Optional[Path] = None,
) -> None:
    """
    Remplace les sorties loguru par celles de l'application.

    Args:
        log_level: Niveau minimum affiche en console
        log_file: Fichier JSON (repertoire cree si besoin)
        rotation_size: Taille declenchant la rotation ("10 MB")
        retention_count: Nombre de fichiers tournes conserves
        scan_log_file: Journal de scan, "scan.log" a cote de log_file par defaut
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    if scan_log_file is None:
        scan_log_file = log_file.with_name(SCAN_LOG_NAME)
    scan_log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        scan_log_file,
        level="WARNING",
        format="{time:YYYY-MM-DD HH:mm:ss} | {message} | {extra}",
        filter=_is_scan_record,
        rotation=rotation_size,
        retention=retention_count,
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), scan_log=str(scan_log_file))
