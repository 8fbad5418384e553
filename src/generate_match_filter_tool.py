"""
generate-match-filter: scaffold a Restify match filter class
"""

from typing import Dict, List, Optional

from code_templates import ArtifactKind, render_artifact
from models import ToolResult
from naming import ensure_suffix
from tool_base import GeneratorTool
from tool_params import GenerateMatchFilterParams

VALID_FILTER_TYPES = ["string", "int", "integer", "bool", "boolean", "datetime", "between", "array", "custom"]


def usage_examples(attribute: str, filter_type: str) -> List[Dict[str, str]]:
    """Example requests with the SQL they translate to"""
    examples = []
    if filter_type in ("string", "text"):
        examples.append({
            "description": "Exact string match",
            "url": f'GET /api/restify/posts?{attribute}="Some Title"',
            "sql": f"WHERE {attribute} = 'Some Title'",
        })
        examples.append({
            "description": "Negated string match",
            "url": f'GET /api/restify/posts?-{attribute}="Some Title"',
            "sql": f"WHERE {attribute} != 'Some Title'",
        })
    elif filter_type in ("int", "integer"):
        examples.append({
            "description": "Integer match",
            "url": f"GET /api/restify/posts?{attribute}=42",
            "sql": f"WHERE {attribute} = 42",
        })
    elif filter_type in ("bool", "boolean"):
        examples.append({
            "description": "Boolean true match",
            "url": f"GET /api/restify/posts?{attribute}=true",
            "sql": f"WHERE {attribute} = 1",
        })
        examples.append({
            "description": "Boolean false match",
            "url": f"GET /api/restify/posts?{attribute}=false",
            "sql": f"WHERE {attribute} = 0",
        })
    elif filter_type == "datetime":
        examples.append({
            "description": "Single date match",
            "url": f"GET /api/restify/posts?{attribute}=2023-12-01",
            "sql": f"WHERE DATE({attribute}) = '2023-12-01'",
        })
        examples.append({
            "description": "Date range match",
            "url": f"GET /api/restify/posts?{attribute}=2023-12-01,2023-12-31",
            "sql": f"WHERE {attribute} BETWEEN '2023-12-01' AND '2023-12-31'",
        })
    elif filter_type == "between":
        examples.append({
            "description": "Between values match",
            "url": f"GET /api/restify/posts?{attribute}=10,100",
            "sql": f"WHERE {attribute} BETWEEN 10 AND 100",
        })
    elif filter_type == "array":
        examples.append({
            "description": "Array/list match",
            "url": f"GET /api/restify/posts?{attribute}=1,2,3",
            "sql": f"WHERE {attribute} IN (1, 2, 3)",
        })
    elif filter_type == "custom":
        examples.append({
            "description": "Custom filter usage",
            "url": f"GET /api/restify/posts?{attribute}=your_value",
            "sql": "Custom logic defined in your filter class",
        })

    examples.append({
        "description": "Null value match",
        "url": f"GET /api/restify/posts?{attribute}=null",
        "sql": f"WHERE {attribute} IS NULL",
    })
    return examples


def repository_integration(attribute: str, class_name: str, filter_type: str, repository: Optional[str]) -> str:
    custom_config = (
        "// Custom filter using matches() method\n"
        "public static function matches(): array\n"
        "{\n"
        "    return [\n"
        f"        '{attribute}' => {class_name}::make(),\n"
        "    ];\n"
        "}"
    )
    snippet = f"// Add to your {repository or 'YourRepository'} class:\n\n"
    if filter_type != "custom":
        snippet += (
            "// Simple configuration using $match array\n"
            "public static array $match = [\n"
            f"    '{attribute}' => '{filter_type}',\n"
            "];\n\n"
            "// Or for more control:\n\n"
        )
    snippet += custom_config + "\n\n"
    snippet += "// Note: When using custom matches() method, the $match array is ignored.\n"
    snippet += "// Make sure to include all your match filters in the matches() method."
    return snippet


class GenerateMatchFilter(GeneratorTool):
    name = "generate-match-filter"
    description = (
        "Generate Laravel Restify match filter classes for exact matching and custom filtering logic. "
        "Supports all match types: string, int, bool, datetime, between, array, and custom filters "
        "with complex logic."
    )
    params_model = GenerateMatchFilterParams
    failure_prefix = "Match filter generation failed"
    artifact_label = "Filter"
    suffix = "Filter"
    default_subdir = "Restify/Filters"

    def run(self, params: GenerateMatchFilterParams) -> ToolResult:
        name = params.name.strip()
        attribute = params.attribute.strip()
        if not name:
            return ToolResult.error("Filter name is required")
        if not attribute:
            return ToolResult.error("Attribute is required")

        if params.type not in VALID_FILTER_TYPES:
            return ToolResult.error("Invalid filter type. Must be one of: " + ", ".join(VALID_FILTER_TYPES))

        class_name = ensure_suffix(name, "Filter")
        location = self.resolve_location(params.namespace)
        file_path = location.base_path / f"{class_name}.php"

        if file_path.exists() and not params.force:
            return self.already_exists(file_path)

        content = render_artifact(ArtifactKind.for_filter(params.type), {
            "namespace": location.namespace,
            "class_name": class_name,
            "attribute": attribute,
            "filter_type": params.type,
            "partial": params.partial,
            "custom_logic": params.custom_logic,
        })
        self.write_artifact(file_path, content)

        return ToolResult.success(
            self.success_report(class_name, attribute, params, str(file_path), location.namespace)
        )

    @staticmethod
    def success_report(
        class_name: str, attribute: str, params: GenerateMatchFilterParams, file_path: str, namespace: str
    ) -> str:
        report = "# Match Filter Generated Successfully!\n\n"
        report += f"**Filter:** `{class_name}`\n"
        report += f"**Attribute:** `{attribute}`\n"
        report += f"**Type:** `{params.type}`" + (" (partial matching)" if params.partial else "") + "\n"
        report += f"**File:** `{file_path}`\n"
        report += f"**Namespace:** `{namespace}`\n\n"

        report += "## Repository Integration\n\n"
        report += "```php\n" + repository_integration(attribute, class_name, params.type, params.repository) + "\n```\n\n"

        report += "## Usage Examples\n\n"
        for example in usage_examples(attribute, params.type):
            report += f"- **{example['description']}:** `{example['url']}` -> `{example['sql']}`\n"

        customize = (
            "Implement your custom filtering logic in the filter() method"
            if params.type == "custom"
            else f"The filter is ready to use with the {params.type} type matching"
        )
        report += "\n## Next Steps\n\n"
        report += f"1. **Review the generated filter** at `{file_path}`\n"
        report += "2. **Add to repository** using either the `$match` array or the `matches()` method\n"
        report += "3. **Test the filter** with the URL examples above\n"
        report += f"4. **Customize as needed**: {customize}\n"
        report += f"5. **Available endpoint**: `GET /api/restify/{{repository}}?{attribute}=value`\n"
        report += "6. **List repository filters**: `GET /api/restify/{repository}/filters?only=matches`\n"
        return report
