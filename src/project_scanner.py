"""
Locates existing artifacts and models inside a Laravel application tree
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from naming import plural, singular, snake

logger = logging.getLogger(__name__)

ARTIFACT_EXCLUDED_DIRS = {"vendor", "tests"}
MODEL_EXCLUDED_DIRS = {"Http", "Console", "Exceptions", "Providers"}

CLASS_DECLARATION = re.compile(
    r"^\s*(?:final\s+|abstract\s+)?class\s+(\w+)\s+extends\s+([\w\\]+)", re.MULTILINE
)
MODEL_BASES = ("Model", "Authenticatable", "Pivot")
NAMESPACE_DECLARATION = re.compile(r"^\s*namespace\s+([\w\\]+)\s*;", re.MULTILINE)
TABLE_PROPERTY = re.compile(r"protected\s+\$table\s*=\s*['\"](\w+)['\"]")


@dataclass
class ArtifactLocation:
    """Where a new artifact of some kind should be written"""
    namespace: str
    base_path: Path


@dataclass
class ModelInfo:
    """An Eloquent model found in the application tree"""
    class_name: str
    base_name: str
    file_path: Path
    table: str


def default_table_name(model_base_name: str) -> str:
    """Eloquent's convention: snake case with the last word pluralized"""
    words = snake(model_base_name).split("_")
    words[-1] = plural(words[-1])
    return "_".join(words)


def _relative_parts(path: Path, app_dir: Path) -> List[str]:
    return list(path.relative_to(app_dir).parts)


def find_artifact_location(
    project_root: Path,
    app_path: str,
    suffix: str,
    default_subdir: str,
    root_namespace: str = "App",
) -> ArtifactLocation:
    """Most common directory holding ``*<suffix>.php`` files wins, the deepest one on ties"""
    app_dir = project_root / app_path
    default = ArtifactLocation(
        namespace=root_namespace + "\\" + default_subdir.replace("/", "\\"),
        base_path=app_dir / default_subdir,
    )

    if not app_dir.is_dir():
        return default

    directories: Counter = Counter()
    for file_path in app_dir.rglob(f"*{suffix}.php"):
        parts = _relative_parts(file_path, app_dir)[:-1]
        if not parts or ARTIFACT_EXCLUDED_DIRS.intersection(parts):
            continue
        directories[tuple(parts)] += 1

    if not directories:
        return default

    best = max(directories.items(), key=lambda item: (item[1], len(item[0])))[0]
    logger.debug(f"Placing new *{suffix} artifacts under {'/'.join(best)}")
    return ArtifactLocation(
        namespace=root_namespace + "\\" + "\\".join(best),
        base_path=app_dir.joinpath(*best),
    )


def find_model(
    project_root: Path, app_path: str, model_name: str, root_namespace: str = "App"
) -> Optional[ModelInfo]:
    """Find an Eloquent model by class name, accepting plural or singular spellings"""
    model_name = model_name.strip().replace("/", "").replace("\\", "")
    app_dir = project_root / app_path
    if not model_name or not app_dir.is_dir():
        return None

    wanted = {model_name.lower(), plural(model_name).lower(), singular(model_name).lower()}
    found = []

    for file_path in sorted(app_dir.rglob("*.php")):
        parts = _relative_parts(file_path, app_dir)
        if MODEL_EXCLUDED_DIRS.intersection(parts[:-1]):
            continue
        if file_path.stem.lower() not in wanted:
            continue

        try:
            source = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping {file_path}: {e}")
            continue

        declaration = CLASS_DECLARATION.search(source)
        if not declaration or declaration.group(2).split("\\")[-1] not in MODEL_BASES:
            continue

        base_name = declaration.group(1)
        namespace = NAMESPACE_DECLARATION.search(source)
        if namespace:
            class_name = namespace.group(1) + "\\" + base_name
        else:
            class_name = root_namespace + "\\" + "\\".join(parts[:-1] + [base_name])

        table = TABLE_PROPERTY.search(source)
        found.append(
            ModelInfo(
                class_name=class_name,
                base_name=base_name,
                file_path=file_path,
                table=table.group(1) if table else default_table_name(base_name),
            )
        )

    if not found:
        return None

    # sorted() is stable, so the first match inside a Models namespace wins
    found.sort(key=lambda model: "\\Models\\" not in model.class_name)
    return found[0]
