"""
Reads table definitions out of Laravel migration files
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from naming import snake

logger = logging.getLogger(__name__)

SCHEMA_BLOCK = re.compile(r"Schema::(create|table)\(\s*['\"](\w+)['\"]")
COLUMN_CALL = re.compile(r"\$table->(\w+)\(([^)]*)\)([^;]*);")
QUOTED = re.compile(r"['\"]([^'\"]+)['\"]")
CLASS_CONSTANT = re.compile(r"(\w+)::class")

# Blueprint method -> normalized column type
COLUMN_TYPES = {
    "string": "string",
    "char": "string",
    "uuid": "string",
    "ulid": "string",
    "enum": "string",
    "ipAddress": "string",
    "text": "text",
    "mediumText": "mediumtext",
    "longText": "longtext",
    "integer": "integer",
    "unsignedInteger": "integer",
    "tinyInteger": "tinyint",
    "unsignedTinyInteger": "tinyint",
    "smallInteger": "smallint",
    "unsignedSmallInteger": "smallint",
    "bigInteger": "bigint",
    "unsignedBigInteger": "bigint",
    "foreignId": "bigint",
    "boolean": "boolean",
    "date": "date",
    "dateTime": "datetime",
    "dateTimeTz": "datetime",
    "timestamp": "timestamp",
    "timestampTz": "timestamp",
    "decimal": "decimal",
    "float": "float",
    "double": "double",
    "json": "json",
    "jsonb": "json",
}


@dataclass
class Column:
    name: str
    type: str
    nullable: bool = False


@dataclass
class TableSchema:
    name: str
    columns: List[Column] = field(default_factory=list)

    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def add(self, column: Column):
        existing = self.column(column.name)
        if existing is None:
            self.columns.append(column)
        else:
            existing.type = column.type
            existing.nullable = column.nullable


class SchemaInspector:
    """Builds table schemas by replaying migrations in filename order"""

    def __init__(self, migrations_dir: Path):
        self.migrations_dir = migrations_dir
        self._tables: Optional[Dict[str, TableSchema]] = None

    @property
    def tables(self) -> Dict[str, TableSchema]:
        if self._tables is None:
            self._tables = self._load()
        return self._tables

    def has_table(self, name: str) -> bool:
        return name in self.tables

    def table(self, name: str) -> Optional[TableSchema]:
        return self.tables.get(name)

    def tables_with_column(self, column_name: str) -> List[str]:
        return [name for name, schema in self.tables.items() if schema.column(column_name)]

    def _load(self) -> Dict[str, TableSchema]:
        tables: Dict[str, TableSchema] = {}
        if not self.migrations_dir.is_dir():
            logger.debug(f"No migrations directory at {self.migrations_dir}")
            return tables

        for path in sorted(self.migrations_dir.glob("*.php")):
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.debug(f"Skipping migration {path}: {e}")
                continue
            self.parse_migration(source, tables)

        return tables

    def parse_migration(self, source: str, tables: Dict[str, TableSchema]) -> Dict[str, TableSchema]:
        """Apply the ``up()`` part of one migration to ``tables``"""
        down = re.search(r"function\s+down\s*\(", source)
        if down:
            source = source[:down.start()]

        blocks = list(SCHEMA_BLOCK.finditer(source))
        for position, block in enumerate(blocks):
            end = blocks[position + 1].start() if position + 1 < len(blocks) else len(source)
            name = block.group(2)
            schema = tables.setdefault(name, TableSchema(name=name))
            for column in self.parse_columns(source[block.end():end]):
                schema.add(column)

        return tables

    def parse_columns(self, body: str) -> List[Column]:
        columns: List[Column] = []
        for match in COLUMN_CALL.finditer(body):
            method, arguments, chain = match.group(1), match.group(2), match.group(3)
            nullable = "->nullable(" in chain
            columns.extend(self._columns_for(method, arguments, nullable))
        return columns

    def _columns_for(self, method: str, arguments: str, nullable: bool) -> List[Column]:
        name = QUOTED.search(arguments)

        if method in ("id", "bigIncrements", "increments"):
            return [Column(name.group(1) if name else "id", "bigint")]
        elif method in ("timestamps", "timestampsTz", "nullableTimestamps"):
            return [Column("created_at", "timestamp", True), Column("updated_at", "timestamp", True)]
        elif method in ("softDeletes", "softDeletesTz"):
            return [Column(name.group(1) if name else "deleted_at", "timestamp", True)]
        elif method == "rememberToken":
            return [Column("remember_token", "string", True)]
        elif method == "foreignIdFor":
            model = CLASS_CONSTANT.search(arguments)
            if not model:
                return []
            return [Column(snake(model.group(1)) + "_id", "bigint", nullable)]
        elif method in ("morphs", "nullableMorphs") and name:
            morph_nullable = nullable or method == "nullableMorphs"
            return [
                Column(name.group(1) + "_id", "bigint", morph_nullable),
                Column(name.group(1) + "_type", "string", morph_nullable),
            ]
        elif method in COLUMN_TYPES and name:
            return [Column(name.group(1), COLUMN_TYPES[method], nullable)]

        return []
