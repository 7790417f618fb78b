"""Output of generated units: text, JSON and unit files."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from podunit.errors import UnitWriteError
from podunit.models.unit import GeneratedUnit


logger = logging.getLogger(__name__)


def write_units(
    units: Sequence[GeneratedUnit],
    directory: Optional[str] = None,
) -> Tuple[List[GeneratedUnit], List[UnitWriteError]]:
    """Write one file per unit into directory (default: current directory).

    Each file is written to a temporary name and renamed into place, so a
    unit file is either complete or absent. A failure is recorded for its
    unit and does not affect the others.
    """
    target = Path(directory) if directory else Path.cwd()
    written = []
    failures = []

    for unit in units:
        path = (target / unit.file_name).absolute()
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            tmp_path.write_text(unit.content)
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            tmp_path.unlink(missing_ok=True)
            failures.append(UnitWriteError(unit.name, path, e))
            continue

        logger.debug(f"Wrote unit file: {path}")
        written.append(
            GeneratedUnit(
                name=unit.name,
                file_name=unit.file_name,
                content=unit.content,
                path=str(path),
            )
        )

    return written, failures


def format_text(units: Sequence[GeneratedUnit], files: bool = False) -> str:
    """Unit text, or the written paths one per line in files mode."""
    if files:
        return "\n".join(unit.path for unit in units if unit.path)
    return "\n".join(unit.content for unit in units)


def format_json(units: Sequence[GeneratedUnit], files: bool = False) -> str:
    """JSON array of units, with paths instead of content in files mode."""
    entries = []
    for unit in units:
        entry = {"name": unit.name, "file_name": unit.file_name}
        if files:
            entry["path"] = unit.path
        else:
            entry["content"] = unit.content
        entries.append(entry)
    return json.dumps(entries, indent=4)
