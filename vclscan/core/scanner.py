from __future__ import annotations

import fnmatch
import logging
import time
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from tqdm import tqdm

from .classifier import DirectiveClassifier
from .models import Annotation
from ..parsers.vcl import UnreadableFileError, VclParser


DEFAULT_LOGGER_NAME = "vclscan"
DEFAULT_INCLUDE = ",".join(f"*.{ext}" for ext in VclParser.SUPPORTED_EXTENSIONS)
DEFAULT_EXCLUDE = ".git,.venv,node_modules,venv,.tox,__pycache__"


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    Diagnostics go to stderr so they never interleave with the analysis text
    on stdout. ``verbose`` raises the level from WARNING to INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


class SingleFileScanner:
    def __init__(
        self,
        file_path: Path,
        classifier: DirectiveClassifier,
        *,
        parser: Optional[VclParser] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.file_path = file_path
        self.classifier = classifier
        self.parser = parser or VclParser()
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def scan(self) -> List[Annotation]:
        """Annotate every line of the file in order.

        Raises UnreadableFileError for binary files and OSError when the file
        cannot be opened.
        """
        start_time = time.perf_counter()
        annotations = self.classifier.classify_all(self.parser.parse(self.file_path))
        duration = time.perf_counter() - start_time
        recognized = sum(1 for a in annotations if a.recognized)
        self.logger.info(
            "Scanned %s: %d line(s), %d recognized, %.3fs",
            self.file_path,
            len(annotations),
            recognized,
            duration,
        )
        return annotations


class DirectoryScanner:
    def __init__(
        self,
        root: Path,
        classifier: DirectiveClassifier,
        include_globs: List[str],
        exclude_dirs: List[str],
        max_file_size: int = 5_000_000,
        *,
        logger: Optional[logging.Logger] = None,
        show_progress: bool = True,
        progress_desc: str = "Scanning VCL files",
    ) -> None:
        self.root = root
        self.classifier = classifier
        self.include_globs = include_globs
        self.exclude_dirs = set(exclude_dirs)
        self.max_file_size = max_file_size
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.show_progress = bool(show_progress)
        self.progress_desc = progress_desc

    def _iter_files(self) -> Iterator[Path]:
        for p in sorted(self.root.rglob("*")):
            if p.is_dir():
                continue
            rel_parts = p.relative_to(self.root).parts[:-1]
            if any(part in self.exclude_dirs for part in rel_parts):
                continue
            if not any(fnmatch.fnmatch(p.name, pat) for pat in self.include_globs):
                continue
            try:
                size = p.stat().st_size
            except OSError as exc:
                self.logger.warning("Unable to stat %s: %s", p, exc)
                continue
            if size > self.max_file_size:
                self.logger.info("Skipping %s (%d bytes > %d)", p, size, self.max_file_size)
                continue
            yield p

    def scan(self) -> Dict[Path, List[Annotation]]:
        files = list(self._iter_files())
        self.logger.info("Discovered %d file(s) to scan under %s", len(files), self.root)

        results: Dict[Path, List[Annotation]] = {}
        if not files:
            return results

        progress_bar = None
        if self.show_progress:
            progress_bar = tqdm(total=len(files), desc=self.progress_desc, unit="file")
        try:
            for path in files:
                scanner = SingleFileScanner(path, self.classifier, logger=self.logger)
                try:
                    results[path] = scanner.scan()
                except (UnreadableFileError, OSError) as exc:
                    self.logger.warning("Skipping %s: %s", path, exc)
                finally:
                    if progress_bar is not None:
                        progress_bar.set_postfix_str(self._format_display_path(path), refresh=False)
                        progress_bar.update(1)
        finally:
            if progress_bar is not None:
                progress_bar.close()
        return results

    def _format_display_path(self, path: Path) -> str:
        try:
            label = str(path.relative_to(self.root))
        except ValueError:
            label = str(path)
        if len(label) > 60:
            label = f"...{label[-57:]}"
        return label
