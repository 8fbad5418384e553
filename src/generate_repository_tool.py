"""
generate-repository: scaffold a Restify repository for an Eloquent model
"""

from typing import List

from code_templates import ArtifactKind, render_artifact
from models import ToolResult
from naming import camel, ensure_suffix, plural, snake
from project_scanner import ModelInfo
from schema_inspector import Column, SchemaInspector
from tool_base import GeneratorTool
from tool_params import GenerateRepositoryParams

FIELD_INDENT = " " * 12
READONLY_COLUMNS = {"created_at", "updated_at", "deleted_at", "email_verified_at"}
NOT_REQUIRED_COLUMNS = {"created_at", "updated_at", "deleted_at", "remember_token"}
TYPE_MODIFIERS = {
    "text": "->textarea()",
    "longtext": "->textarea()",
    "mediumtext": "->textarea()",
    "integer": "->number()",
    "bigint": "->number()",
    "smallint": "->number()",
    "decimal": "->number()",
    "float": "->number()",
    "double": "->number()",
    "boolean": "->boolean()",
    "tinyint": "->boolean()",
    "date": "->date()",
    "datetime": "->datetime()",
    "timestamp": "->datetime()",
    "json": "->json()",
}


def field_for_column(column: Column) -> str:
    """One ``field('...')`` line with modifiers derived from the column type"""
    field = f"{FIELD_INDENT}field('{column.name}')"

    if column.type == "string":
        if "email" in column.name:
            field += "->email()"
        elif "password" in column.name:
            field += "->password()->storable()"
    else:
        field += TYPE_MODIFIERS.get(column.type, "")

    if column.nullable:
        field += "->nullable()"

    readonly = column.name in READONLY_COLUMNS
    if readonly:
        field += "->readonly()"
    elif not column.nullable and column.name not in NOT_REQUIRED_COLUMNS:
        field += "->required()"

    return field + ","


class GenerateRepository(GeneratorTool):
    name = "generate-repository"
    description = (
        "Generate a Laravel Restify repository class for an existing Eloquent model. Detects the "
        "model in the application, reads its migration schema to generate fields and BelongsTo/HasMany "
        "relationships, and places the repository next to the existing ones."
    )
    params_model = GenerateRepositoryParams
    failure_prefix = "Repository generation failed"
    artifact_label = "Repository"
    suffix = "Repository"
    default_subdir = "Restify"

    def run(self, params: GenerateRepositoryParams) -> ToolResult:
        model_name = params.model_name.strip()
        if not model_name:
            return ToolResult.error("Model name is required")

        model = self.find_model(model_name)
        if model is None:
            return ToolResult.error(f"Could not find model: {model_name}")

        location = self.resolve_location(params.namespace)
        repository_name = ensure_suffix(params.repository_name or model.base_name + "Repository", "Repository")
        file_path = location.base_path / f"{repository_name}.php"

        if file_path.exists() and not params.force:
            return self.already_exists(file_path)

        schema = SchemaInspector(self.project_root / self.config_manager.get(
            "generators.migrations_path", "database/migrations"
        ))
        fields: List[str] = []
        relationships: List[str] = []
        if schema.has_table(model.table):
            if params.include_fields:
                fields = self.generate_fields(schema, model.table)
            if params.include_relationships:
                relationships = self.generate_relationships(schema, model)

        content = render_artifact(ArtifactKind.REPOSITORY, {
            "namespace": location.namespace,
            "class_name": repository_name,
            "model_class": model.class_name,
            "model_base_name": model.base_name,
            "fields": fields,
            "relationships": relationships,
        })
        self.write_artifact(file_path, content)

        return ToolResult.success(
            self.success_report(repository_name, model, str(file_path), location.namespace, fields, relationships)
        )

    @staticmethod
    def generate_fields(schema: SchemaInspector, table: str) -> List[str]:
        fields = [f"{FIELD_INDENT}id(),"]
        for column in schema.table(table).columns:
            # foreign keys become relationships
            if column.name == "id" or column.name.endswith("_id"):
                continue
            fields.append(field_for_column(column))
        return fields

    @staticmethod
    def generate_relationships(schema: SchemaInspector, model: ModelInfo) -> List[str]:
        relationships = []
        for column in schema.table(model.table).column_names():
            if column.endswith("_id"):
                relationships.append(f"{FIELD_INDENT}BelongsTo::make('{camel(column[:-3])}'),")

        foreign_key = snake(model.base_name) + "_id"
        for other_table in schema.tables_with_column(foreign_key):
            if other_table != model.table:
                relationships.append(f"{FIELD_INDENT}HasMany::make('{camel(other_table)}'),")

        return relationships

    @staticmethod
    def success_report(
        repository_name: str,
        model: ModelInfo,
        file_path: str,
        namespace: str,
        fields: List[str],
        relationships: List[str],
    ) -> str:
        report = "# Repository Generated Successfully!\n\n"
        report += f"**Repository:** `{repository_name}`\n"
        report += f"**Model:** `{model.base_name}`\n"
        report += f"**File:** `{file_path}`\n"
        report += f"**Namespace:** `{namespace}`\n\n"

        report += "## Generated Features\n\n"
        if fields:
            report += f"✅ **Fields:** Generated {len(fields)} field(s) from model schema\n"
        if relationships:
            report += f"✅ **Relationships:** Generated {len(relationships)} relationship(s)\n"

        report += "\n## Next Steps\n\n"
        report += f"1. **Review the generated repository** at `{file_path}`\n"
        report += "2. **Register the repository** in your routes or RestifyServiceProvider\n"
        report += "3. **Customize fields and relationships** as needed\n"
        report += "4. **Add validation rules, authorization, and custom logic**\n\n"

        for heading, lines in (("Generated Fields", fields), ("Generated Relationships", relationships)):
            if lines:
                report += f"## {heading}\n\n"
                report += "".join(f"- `{line.strip()}`\n" for line in lines)
                report += "\n"

        report += "## Additional Commands\n\n"
        report += "Generate related components:\n"
        report += f"- **Policy:** `php artisan restify:policy {model.base_name}`\n"
        report += f"- **Factory:** `php artisan make:factory {model.base_name}Factory`\n"
        report += f"- **Migration:** `php artisan make:migration create_{snake(plural(model.base_name))}_table`\n"
        return report
