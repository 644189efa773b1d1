"""
ArtifactWriter — Persists one file's extraction result.

For a source file `main.go` the destination directory receives:
- main.go.extracted.json  extraction metadata (Value/Filename/Offset/Line/Column)
- main.go.en.json         resource seed, [{"id", "translation"}] (or .en.yaml)
- main.go.en.po           gettext catalog, only when catalog emission is on

Only the destination directory is created when the result is empty, and
nothing at all in dry-run mode. Records are ordered by byte offset so
unchanged input gives byte-identical output.
"""

import json
import logging
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

import yaml
from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po

from ..config import ExtractOptions
from ..core.literals import ExtractionResult, LiteralRecord
from ..errors import WriteFailure

logger = logging.getLogger(__name__)


EXTRACTED_SUFFIX = ".extracted.json"
SOURCE_LOCALE = "en"
JSON_INDENT = 3


class ArtifactWriter:
    """
    Writes extraction artifacts for one source file at a time.

    Usage:
        writer = ArtifactWriter(options)
        written = writer.write(result, Path("/work/app/main.go"), Path("/work/app"))
    """

    def __init__(self, options: ExtractOptions):
        self.options = options

    # -------------------------------------------------------------------------
    # Naming
    # -------------------------------------------------------------------------

    @staticmethod
    def base_name(source_path: Path) -> str:
        """Source base name, with any extraction-artifact suffix removed."""
        name = Path(source_path).name
        return name.split(EXTRACTED_SUFFIX)[0]

    def artifact_names(self, source_path: Path) -> Dict[str, str]:
        """File names of the three artifacts for a source file."""
        base = self.base_name(source_path)
        return {
            "extracted": f"{base}{EXTRACTED_SUFFIX}",
            "bundle": f"{base}.{SOURCE_LOCALE}.{self.options.bundle_format}",
            "catalog": f"{base}.{SOURCE_LOCALE}.po",
        }

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def records(self, result: ExtractionResult, source_path: Path) -> List[LiteralRecord]:
        """Records ordered by offset, filename normalized to the base name."""
        base = self.base_name(source_path)
        ordered = sorted(result.values(), key=lambda r: (r.offset, r.value))
        return [replace(record, filename=base) for record in ordered]

    @staticmethod
    def render_extracted(records: List[LiteralRecord]) -> str:
        """Extraction metadata as indented JSON."""
        return json.dumps(
            [record.to_dict() for record in records],
            indent=JSON_INDENT,
            ensure_ascii=False,
        )

    def render_bundle(self, records: List[LiteralRecord]) -> str:
        """Resource seed: every literal translates to itself."""
        entries = [{"id": r.value, "translation": r.value} for r in records]
        if self.options.bundle_format == "yaml":
            return yaml.safe_dump(entries, allow_unicode=True, sort_keys=False, default_flow_style=False)
        return json.dumps(entries, indent=JSON_INDENT, ensure_ascii=False)

    @staticmethod
    def build_catalog(records: List[LiteralRecord], source_path: Path) -> Catalog:
        """gettext catalog with msgstr seeded from msgid."""
        try:
            stamp = datetime.fromtimestamp(Path(source_path).stat().st_mtime, tz=timezone.utc)
        except OSError:
            stamp = datetime.now(timezone.utc)

        catalog = Catalog(
            locale=SOURCE_LOCALE,
            project="i18nscan",
            creation_date=stamp,
            revision_date=stamp,
        )
        for record in records:
            catalog.add(record.value, string=record.value, locations=[(record.filename, record.line)])
        return catalog

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def write(self, result: ExtractionResult, source_path: Path, output_dir: Path) -> List[Path]:
        """
        Persist all artifacts for one file.

        Returns:
            Paths written, empty in dry-run mode or for an empty result

        Raises:
            WriteFailure: If the directory or a file cannot be written
        """
        records = self.records(result, source_path)
        names = self.artifact_names(source_path)
        output_dir = Path(output_dir)

        if self.options.dry_run:
            logger.debug("dry run, skipping %s in %s", ", ".join(names.values()), output_dir)
            return []

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteFailure(f"cannot create output directory ({e.strerror})", output_dir) from e

        if not records:
            logger.debug("no strings extracted from %s, nothing to save", source_path)
            return []

        written = []
        logger.debug("saving extracted strings to %s", output_dir / names["extracted"])
        written.append(self._write_text(output_dir / names["extracted"], self.render_extracted(records)))
        written.append(self._write_text(output_dir / names["bundle"], self.render_bundle(records)))

        if self.options.po:
            written.append(self._write_catalog(output_dir / names["catalog"], records, source_path))

        return written

    @staticmethod
    def _write_text(path: Path, text: str) -> Path:
        try:
            path.write_text(text, encoding='utf-8')
        except OSError as e:
            raise WriteFailure(f"cannot write artifact ({e.strerror})", path) from e
        return path

    def _write_catalog(self, path: Path, records: List[LiteralRecord], source_path: Path) -> Path:
        catalog = self.build_catalog(records, source_path)
        try:
            with open(path, 'wb') as f:
                write_po(f, catalog)
        except OSError as e:
            raise WriteFailure(f"cannot write catalog ({e.strerror})", path) from e
        return path
