"""
generate-getter: scaffold a Restify getter class
"""

from code_templates import ArtifactKind, render_artifact
from models import ToolResult
from naming import ensure_suffix, kebab
from tool_base import GeneratorTool
from tool_params import GenerateGetterParams

VALID_GETTER_TYPES = ["invokable", "extended"]
VALID_SCOPES = ["index", "show", "both"]


class GenerateGetter(GeneratorTool):
    name = "generate-getter"
    description = (
        "Generate a Laravel Restify getter class for read-only GET endpoints. Supports invokable "
        "getters (__invoke method) and extended getters (extends Getter) scoped to index, show or both."
    )
    params_model = GenerateGetterParams
    failure_prefix = "Getter generation failed"
    artifact_label = "Getter"
    suffix = "Getter"
    default_subdir = "Restify/Getters"

    def run(self, params: GenerateGetterParams) -> ToolResult:
        getter_name = params.getter_name.strip()
        if not getter_name:
            return ToolResult.error("Getter name is required")

        if params.getter_type not in VALID_GETTER_TYPES:
            return ToolResult.error("Invalid getter type. Must be one of: " + ", ".join(VALID_GETTER_TYPES))

        if params.scope not in VALID_SCOPES:
            return ToolResult.error("Invalid scope. Must be one of: " + ", ".join(VALID_SCOPES))

        class_name = ensure_suffix(getter_name, "Getter")
        location = self.resolve_location(params.namespace)
        file_path = location.base_path / f"{class_name}.php"

        if file_path.exists() and not params.force:
            return self.already_exists(file_path)

        model = self.find_model(params.model_name)
        content = render_artifact(ArtifactKind.for_getter(params.getter_type), {
            "namespace": location.namespace,
            "class_name": class_name,
            "scope": params.scope,
            "model_name": params.model_name,
            "model_class": model.class_name if model else None,
            "uri_key": params.uri_key,
        })
        self.write_artifact(file_path, content)

        return ToolResult.success(self.success_report(class_name, params, str(file_path), location.namespace))

    @staticmethod
    def success_report(class_name: str, params: GenerateGetterParams, file_path: str, namespace: str) -> str:
        key = params.uri_key or kebab(class_name.replace("Getter", ""))
        index_url = f"GET: api/restify/models/getters/{key}"
        show_url = f"GET: api/restify/models/1/getters/{key}"

        report = "# Getter Generated Successfully!\n\n"
        report += f"**Getter:** `{class_name}`\n"
        report += f"**Type:** `{params.getter_type}`\n"
        report += f"**Scope:** `{params.scope}`\n"
        report += f"**File:** `{file_path}`\n"
        report += f"**Namespace:** `{namespace}`\n\n"

        if params.getter_type == "invokable":
            report += "## Invokable Getter\n\n"
            report += "This getter uses the **simple invokable format** with an `__invoke()` method.\n\n"
        else:
            report += "## Extended Getter\n\n"
            report += "This getter **extends the Getter base class** with a `handle()` method.\n\n"

        if params.scope == "index":
            report += "## Index Getter Usage\n\nThis getter works with **multiple items**. Usage:\n\n"
            registration = f"{class_name}::new()->onlyOnIndex(),"
            calls = index_url
        elif params.scope == "show":
            report += "## Show Getter Usage\n\nThis getter works with a **single model**. Usage:\n\n"
            registration = f"{class_name}::new()->onlyOnShow(),"
            calls = show_url
        else:
            report += "## Flexible Getter Usage\n\n"
            report += "This getter can be used in **both index and show contexts**. Usage:\n\n"
            registration = f"{class_name}::new(), // Available on both index and show"
            calls = f"# Index context (multiple items)\n{index_url}\n\n# Show context (single model)\n{show_url}"

        report += "1. Register in repository:\n"
        report += "```php\n"
        report += "public function getters(RestifyRequest $request): array\n"
        report += "{\n"
        report += "    return [\n"
        report += f"        {registration}\n"
        report += "    ];\n"
        report += "}\n"
        report += "```\n\n"
        report += f"2. Call via API:\n```http\n{calls}\n```\n"

        method = "__invoke" if params.getter_type == "invokable" else "handle"
        report += "\n## Next Steps\n\n"
        report += f"1. **Review the generated getter** at `{file_path}`\n"
        report += f"2. **Implement the business logic** in the {method} method\n"
        report += "3. **Register the getter** in your repository's `getters()` method\n"
        report += "4. **Add authorization** using `->canSee()` if needed\n"
        report += "5. **Test the getter** via API calls or feature tests\n\n"

        report += "## Getter Features Generated\n\n"
        if params.uri_key:
            report += "✅ **Properties**: Custom URI key and getter settings\n"
        report += f"✅ **Method**: {params.getter_type.capitalize()} method with proper signature\n"
        if params.scope != "both":
            report += f"✅ **Scope**: Configured for {params.scope} context\n"

        report += "\n## Additional Resources\n\n"
        report += "- **Authorization**: Use `->canSee(fn($request) => ...)` for access control\n"
        report += "- **Custom URI Key**: Set `$uriKey` property for consistent API endpoints\n"
        report += "- **GET-only**: Remember getters should only perform read operations\n"
        return report
