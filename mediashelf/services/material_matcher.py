"""
Service de matching des materiaux.

MaterialMatcherService parcourt les dossiers surveilles, normalise et score
chaque fichier video/audio contre les titres d'une oeuvre, et agrege les
candidats par categorie de dossier.

Regles:
- default et temp sont fusionnes sous la categorie DEFAULT
- seuls les fichiers VIDEO et AUDIO sont scores
- score = max(score du nom de fichier, score des dossiers parents sous la racine)
- un chemin n'apparait qu'une fois : SOURCE, puis FINISHED, puis DEFAULT
- le perimetre (FolderSet) est fige au debut du scan

Le matching par lot (match_all) parcourt les dossiers partages une seule
fois, isole les echecs par oeuvre et supporte l'annulation entre oeuvres.
"""

import asyncio
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from loguru import logger

from mediashelf.core.entities import CatalogItem
from mediashelf.core.errors import InvalidInputError, ScanRootUnavailableError
from mediashelf.core.value_objects import (
    MATCHABLE_FILE_TYPES,
    FileEntry,
    FolderCategory,
    FolderSet,
    MatchCandidate,
    ScanWarning,
)
from mediashelf.services.normalizer import normalize
from mediashelf.services.scanner import DirectoryWalker
from mediashelf.services.similarity import score
from mediashelf.utils.constants import FINISHED_PATH_MARKERS, SCAN_CHANNEL
from mediashelf.utils.helpers import normalize_folder_path

scan_logger = logger.bind(channel=SCAN_CHANNEL)

# Ordre de priorite en cas de chemin present dans plusieurs categories
CATEGORY_PRECEDENCE: tuple[FolderCategory, ...] = (
    FolderCategory.FINISHED,
    FolderCategory.SOURCE,
    FolderCategory.DEFAULT,
)

CategoryEntries = dict[FolderCategory, list[FileEntry]]


@dataclass
class MatchReport:
    """
    Resultat d'un matching pour une oeuvre.

    Attributes:
        candidates: Candidats retenus (non tries, uniques par chemin)
        warnings: Dossiers ignores pendant le parcours
    """

    candidates: list[MatchCandidate] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """True si au moins un dossier a ete ignore."""
        return bool(self.warnings)


@dataclass
class BatchItemResult:
    """Candidats trouves pour une oeuvre lors d'un matching par lot."""

    item: CatalogItem
    candidates: list[MatchCandidate] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)


@dataclass
class BatchItemFailure:
    """
    Echec du scan d'une oeuvre lors d'un matching par lot.

    Attributes:
        item_id: ID de l'oeuvre
        title: Titre de l'oeuvre
        reason: Cause de l'echec
        path: Dossier en cause (si connu)
    """

    item_id: Optional[int]
    title: str
    reason: str
    path: Optional[str] = None


@dataclass
class BatchReport:
    """
    Resultat d'un matching par lot.

    Attributes:
        results: Resultats par oeuvre, dans l'ordre des oeuvres fournies
        failures: Oeuvres dont le scan a echoue
        cancelled: True si le lot a ete annule avant la fin
        skipped_item_ids: Oeuvres non scannees (doublon ou annulation)
        warnings: Avertissements des dossiers partages
    """

    results: list[BatchItemResult] = field(default_factory=list)
    failures: list[BatchItemFailure] = field(default_factory=list)
    cancelled: bool = False
    skipped_item_ids: list[Optional[int]] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        """Nombre d'oeuvres en echec."""
        return len(self.failures)

    @property
    def candidate_count(self) -> int:
        """Nombre total de candidats trouves."""
        return sum(len(result.candidates) for result in self.results)


def _validate_threshold(threshold: int) -> None:
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise InvalidInputError(f"Seuil invalide: {threshold!r} (entier 0-100 attendu)")
    if not 0 <= threshold <= 100:
        raise InvalidInputError(f"Seuil hors limites: {threshold} (0-100 attendu)")


def _clean_titles(titles: Iterable[str]) -> list[str]:
    cleaned: list[str] = []
    for title in titles:
        if title and title.strip() and title.strip() not in cleaned:
            cleaned.append(title.strip())
    return cleaned


def _path_key(path: str) -> str:
    return os.path.normpath(path)


def infer_category(path: str, folders: FolderSet) -> FolderCategory:
    """
    Deduit la categorie d'un fichier deja associe.

    Le dossier source ou finalise le plus long qui prefixe le chemin
    l'emporte (a longueur egale, selon CATEGORY_PRECEDENCE). Sinon, un
    composant "finished" ou "成片" dans le chemin designe un fichier
    finalise, y compris sous un dossier general.

    Args:
        path: Chemin du fichier
        folders: Dossiers configures

    Returns:
        Categorie deduite, DEFAULT si rien ne correspond.
    """
    target = path.replace("\\", "/").casefold()
    best: Optional[FolderCategory] = None
    best_length = -1
    roots_by_category = folders.by_category()
    for category in CATEGORY_PRECEDENCE:
        for root in roots_by_category[category]:
            prefix = normalize_folder_path(root)
            if target.startswith(prefix) and len(prefix) > best_length:
                best = category
                best_length = len(prefix)
    if best in (FolderCategory.SOURCE, FolderCategory.FINISHED):
        return best

    components = {part for part in target.split("/") if part}
    if components & FINISHED_PATH_MARKERS:
        return FolderCategory.FINISHED
    return FolderCategory.DEFAULT


class MaterialMatcherService:
    """
    Service de matching flou entre oeuvres et fichiers du disque.

    Les parcours (bloquants) s'executent dans des threads via
    asyncio.to_thread, limites par un semaphore.

    Example:
        matcher = MaterialMatcherService(DirectoryWalker(FileSystemAdapter()))
        report = await matcher.match_one(["Inception"], folders, threshold=80)
    """

    def __init__(
        self,
        walker: DirectoryWalker,
        max_concurrent_scans: int = 4,
        batch_workers: int = 4,
    ) -> None:
        """
        Initialise le service.

        Args:
            walker: Parcours des dossiers
            max_concurrent_scans: Nombre maximum de parcours simultanes
            batch_workers: Nombre d'oeuvres traitees simultanement par match_all
        """
        self._walker = walker
        self._max_concurrent_scans = max(1, max_concurrent_scans)
        self._batch_workers = max(1, batch_workers)

    async def match_one(
        self,
        titles: Iterable[str],
        folders: FolderSet,
        threshold: int,
    ) -> MatchReport:
        """
        Cherche les fichiers correspondant aux titres d'une oeuvre.

        Args:
            titles: Titres cibles (titre, titre original, alias)
            folders: Dossiers a parcourir, par categorie
            threshold: Score minimum 0-100

        Returns:
            MatchReport (vide si aucun titre ou aucun dossier)

        Raises:
            InvalidInputError: Ni titre ni dossier, ou seuil hors 0-100
        """
        targets = _clean_titles(titles)
        snapshot = folders.snapshot()
        if not targets and snapshot.is_empty:
            raise InvalidInputError("Aucun dossier a parcourir et aucun titre a comparer")
        _validate_threshold(threshold)
        if not targets or snapshot.is_empty:
            return MatchReport()

        semaphore = asyncio.Semaphore(self._max_concurrent_scans)
        entries, warnings = await self._scan_categories(snapshot.by_category(), semaphore)
        candidates = self._collect_candidates(targets, entries, threshold)

        logger.info(
            f"Matching termine: {len(candidates)} candidat(s)",
            titles=targets,
            threshold=threshold,
            warnings=len(warnings),
        )
        return MatchReport(candidates=candidates, warnings=warnings)

    async def match_all(
        self,
        items: Iterable[CatalogItem],
        folders: FolderSet,
        threshold: int,
        *,
        max_workers: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        on_result: Optional[Callable[[BatchItemResult], None]] = None,
    ) -> BatchReport:
        """
        Matching par lot sur plusieurs oeuvres.

        Les dossiers partages sont parcourus une seule fois. Chaque oeuvre
        parcourt en plus ses propres matched_folders (categorie DEFAULT) ;
        si l'un d'eux est inaccessible, l'oeuvre est marquee en echec et le
        lot continue. Les fichiers deja associes a l'oeuvre sont exclus.

        Args:
            items: Oeuvres a traiter
            folders: Dossiers partages
            threshold: Score minimum 0-100
            max_workers: Nombre d'oeuvres traitees simultanement
            cancel_event: Annulation cooperative, verifiee avant chaque oeuvre
            on_result: Callback appele pour chaque oeuvre traitee avec succes

        Returns:
            BatchReport avec resultats, echecs et oeuvres ignorees

        Raises:
            InvalidInputError: Seuil hors 0-100
        """
        _validate_threshold(threshold)
        snapshot = folders.snapshot()
        report = BatchReport()

        queue: list[CatalogItem] = []
        seen_ids: set[int] = set()
        for item in items:
            if item.id is not None and item.id in seen_ids:
                logger.debug(f"Oeuvre en double ignoree: {item.id}")
                report.skipped_item_ids.append(item.id)
                continue
            if item.id is not None:
                seen_ids.add(item.id)
            queue.append(item)

        if not queue:
            return report

        semaphore = asyncio.Semaphore(self._max_concurrent_scans)
        shared: CategoryEntries = {}
        if not snapshot.is_empty:
            shared, report.warnings = await self._scan_categories(
                snapshot.by_category(), semaphore
            )

        workers = asyncio.Semaphore(max(1, max_workers or self._batch_workers))
        positions = {id(item): index for index, item in enumerate(queue)}

        async def run(item: CatalogItem) -> None:
            async with workers:
                if cancel_event is not None and cancel_event.is_set():
                    report.cancelled = True
                    report.skipped_item_ids.append(item.id)
                    return
                try:
                    result = await self._match_item(item, shared, snapshot, threshold, semaphore)
                except ScanRootUnavailableError as e:
                    scan_logger.warning(f"Echec du matching pour '{item.title}': {e}")
                    report.failures.append(
                        BatchItemFailure(item.id, item.title, e.reason, path=e.path)
                    )
                    return
                except Exception as e:
                    scan_logger.warning(f"Echec du matching pour '{item.title}': {e}")
                    report.failures.append(BatchItemFailure(item.id, item.title, str(e)))
                    return

                report.results.append(result)
                if on_result:
                    on_result(result)

        await asyncio.gather(*(run(item) for item in queue))

        report.results.sort(key=lambda result: positions[id(result.item)])
        logger.info(
            f"Matching par lot termine: {len(report.results)} oeuvre(s), "
            f"{report.failure_count} echec(s)",
            candidates=report.candidate_count,
            cancelled=report.cancelled,
        )
        return report

    async def _match_item(
        self,
        item: CatalogItem,
        shared: CategoryEntries,
        snapshot: FolderSet,
        threshold: int,
        semaphore: asyncio.Semaphore,
    ) -> BatchItemResult:
        targets = item.match_titles()
        if not targets:
            return BatchItemResult(item=item)

        known = {_path_key(folder) for folder in snapshot.all_folders()}
        own_roots = [
            folder
            for folder in FolderSet.build(temp=item.matched_folders).temp
            if _path_key(folder) not in known
        ]

        entries: CategoryEntries = {category: list(found) for category, found in shared.items()}
        warnings: list[ScanWarning] = []
        if own_roots:
            own_entries, warnings = await self._scan_roots(own_roots, semaphore)
            for warning in warnings:
                if warning.is_root:
                    raise ScanRootUnavailableError(warning.path, warning.reason)
            entries.setdefault(FolderCategory.DEFAULT, []).extend(own_entries)

        linked = {_path_key(path) for path in item.material_paths()}
        candidates = [
            candidate
            for candidate in self._collect_candidates(targets, entries, threshold)
            if _path_key(candidate.path) not in linked
        ]
        return BatchItemResult(item=item, candidates=candidates, warnings=warnings)

    async def _scan_categories(
        self,
        roots_by_category: dict[FolderCategory, tuple[str, ...]],
        semaphore: asyncio.Semaphore,
    ) -> tuple[CategoryEntries, list[ScanWarning]]:
        """Parcourt chaque categorie en parallele ; un echec devient un avertissement."""
        categories = [category for category, roots in roots_by_category.items() if roots]
        outcomes = await asyncio.gather(
            *(self._scan_roots(roots_by_category[category], semaphore) for category in categories),
            return_exceptions=True,
        )

        entries: CategoryEntries = {}
        warnings: list[ScanWarning] = []
        for category, outcome in zip(categories, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                scan_logger.warning(
                    f"Echec du parcours de la categorie {category.value}: {outcome}"
                )
                warnings.extend(
                    ScanWarning(root, str(outcome), is_root=True)
                    for root in roots_by_category[category]
                )
                continue
            found, category_warnings = outcome
            entries[category] = found
            warnings.extend(category_warnings)
        return entries, warnings

    async def _scan_roots(
        self,
        roots: Iterable[str],
        semaphore: asyncio.Semaphore,
    ) -> tuple[list[FileEntry], list[ScanWarning]]:
        roots = list(roots)
        warnings: list[ScanWarning] = []
        async with semaphore:
            found = await asyncio.to_thread(
                lambda: list(self._walker.walk(roots, MATCHABLE_FILE_TYPES, warnings))
            )
        logger.debug(f"{len(found)} fichier(s) trouves", roots=roots)
        return found, warnings

    def _collect_candidates(
        self,
        targets: list[str],
        entries: CategoryEntries,
        threshold: int,
    ) -> list[MatchCandidate]:
        """Score, filtre par seuil et deduplique par chemin."""
        candidates: list[MatchCandidate] = []
        seen: set[str] = set()
        for category in CATEGORY_PRECEDENCE:
            for entry in entries.get(category, ()):
                key = _path_key(entry.path)
                if key in seen:
                    continue
                entry_score = self._score_entry(entry, targets)
                if entry_score < threshold:
                    continue
                seen.add(key)
                candidates.append(
                    MatchCandidate(
                        key=entry.path,
                        name=entry.name,
                        path=entry.path,
                        size=str(entry.size),
                        score=entry_score,
                        file_type=entry.file_type,
                        category=category,
                        modified_at=entry.modified_at,
                    )
                )
        return candidates

    @staticmethod
    def _score_entry(entry: FileEntry, targets: list[str]) -> int:
        """Meilleur score entre le nom du fichier et ses dossiers parents sous la racine."""
        best = score(normalize(entry.name), targets)
        if best == 100 or not entry.root:
            return best

        parent = os.path.dirname(entry.path)
        relative = os.path.relpath(parent, entry.root) if parent else os.curdir
        if relative == os.curdir or relative.startswith(os.pardir):
            return best
        for component in relative.split(os.sep):
            if component:
                best = max(best, score(normalize(component, has_extension=False), targets))
        return best
