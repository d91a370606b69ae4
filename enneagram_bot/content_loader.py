from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict

DESCRIPTIONS_DIR = (Path(__file__).resolve().parent / "descriptions").resolve()


def read_description(path: Path) -> str:
    """Purpose: Read one wing description as it is shown to the user.
    Inputs/Outputs: Input is a "<label>.md" path; output is its text without a
        leading BOM or trailing newlines.
    Side Effects / State: Reads the file.
    Failure Modes: Invalid UTF-8 bytes become U+FFFD instead of failing the
        whole description set.
    Testing Notes: A BOM-prefixed file and a file with a stray 0xFF byte both load.
    """
    return path.read_bytes().decode("utf-8-sig", errors="replace").rstrip("\n")


def load_wing_details(directory: Path = DESCRIPTIONS_DIR) -> Dict[str, str]:
    """Purpose: Load the long-form description of every wing label.
    Inputs/Outputs: Input is a directory of "<label>.md" files; output maps label
        (e.g. "5w4") to its description without trailing newlines.
    Side Effects / State: Reads every markdown file in the directory.
    Failure Modes: A missing directory yields an empty mapping.
    Testing Notes: The packaged directory must provide all eighteen labels.
    """
    if not directory.is_dir():
        return {}
    return {path.stem: read_description(path) for path in sorted(directory.glob("*.md"))}


@lru_cache(maxsize=1)
def default_wing_details() -> Dict[str, str]:
    return load_wing_details()
