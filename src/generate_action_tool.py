"""
generate-action: scaffold a Restify action class
"""

from code_templates import ArtifactKind, render_artifact
from models import ToolResult
from naming import ensure_suffix, kebab
from tool_base import GeneratorTool
from tool_params import GenerateActionParams

VALID_ACTION_TYPES = ["index", "show", "standalone", "invokable", "destructive"]

# (heading, description, registration line) per action type
USAGE = {
    "index": ("Index Action", "This action works with **multiple models**.", "{name}::new()->onlyOnIndex(),"),
    "show": ("Show Action", "This action works with a **single model**.", "{name}::new()->onlyOnShow(),"),
    "standalone": ("Standalone Action", "This action works **without models**.", "{name}::new()->standalone(),"),
    "invokable": ("Invokable Action", "This is a **simple invokable action**.", "new {name},"),
    "destructive": (
        "Destructive Action",
        "This action is marked as **destructive** (for deletions, etc.).",
        "{name}::new(),",
    ),
}
API_CALLS = {
    "index": ("POST: api/restify/models/actions?action={key}", '{\n  "repositories": [1, 2, 3]\n}'),
    "show": ("POST: api/restify/models/1/actions?action={key}", "{}"),
    "standalone": ("POST: api/restify/models/actions?action={key}", "{}"),
}


class GenerateAction(GeneratorTool):
    name = "generate-action"
    description = (
        "Generate a Laravel Restify action class. Supports index actions (multiple models), show "
        "actions (single model), standalone actions (no models), invokable and destructive actions, "
        "with optional validation rules and a custom URI key."
    )
    params_model = GenerateActionParams
    failure_prefix = "Action generation failed"
    artifact_label = "Action"
    suffix = "Action"
    default_subdir = "Restify/Actions"

    def run(self, params: GenerateActionParams) -> ToolResult:
        action_name = params.action_name.strip()
        if not action_name:
            return ToolResult.error("Action name is required")

        if params.action_type not in VALID_ACTION_TYPES:
            return ToolResult.error("Invalid action type. Must be one of: " + ", ".join(VALID_ACTION_TYPES))

        class_name = ensure_suffix(action_name, "Action")
        location = self.resolve_location(params.namespace)
        file_path = location.base_path / f"{class_name}.php"

        if file_path.exists() and not params.force:
            return self.already_exists(file_path)

        model = self.find_model(params.model_name)
        kind = ArtifactKind.for_action(params.action_type)
        content = render_artifact(kind, {
            "namespace": location.namespace,
            "class_name": class_name,
            "model_name": params.model_name,
            "model_class": model.class_name if model else None,
            "validation_rules": params.validation_rules or {},
            "uri_key": params.uri_key,
        })
        self.write_artifact(file_path, content)

        return ToolResult.success(
            self.success_report(class_name, params, str(file_path), location.namespace)
        )

    @staticmethod
    def success_report(class_name: str, params: GenerateActionParams, file_path: str, namespace: str) -> str:
        report = "# Action Generated Successfully!\n\n"
        report += f"**Action:** `{class_name}`\n"
        report += f"**Type:** `{params.action_type}`\n"
        report += f"**File:** `{file_path}`\n"
        report += f"**Namespace:** `{namespace}`\n\n"

        heading, description, registration = USAGE[params.action_type]
        report += f"## {heading}\n\n{description} Usage:\n\n"
        report += "1. Register in repository:\n"
        report += "```php\n"
        report += "public function actions(RestifyRequest $request): array\n"
        report += "{\n"
        report += "    return [\n"
        report += "        " + registration.format(name=class_name) + "\n"
        report += "    ];\n"
        report += "}\n"
        report += "```\n"

        if params.action_type in API_CALLS:
            url, body = API_CALLS[params.action_type]
            key = params.uri_key or kebab(class_name.replace("Action", ""))
            report += "\n2. Call via API:\n"
            report += f"```http\n{url.format(key=key)}\n{body}\n```\n"

        report += "\n## Next Steps\n\n"
        report += f"1. **Review the generated action** at `{file_path}`\n"
        report += "2. **Implement the business logic** in the handle method\n"
        report += "3. **Register the action** in your repository's `actions()` method\n"
        report += "4. **Add authorization** using `->canSee()` if needed\n"
        report += "5. **Test the action** via API calls or feature tests\n\n"

        report += "## Action Features Generated\n\n"
        if params.uri_key or params.action_type == "standalone":
            report += "✅ **Properties**: Custom URI key and action settings\n"
        if params.validation_rules:
            report += "✅ **Validation**: Custom validation rules method\n"
        if params.action_type == "index" and params.model_name:
            report += "✅ **Index Query**: Custom query filtering method\n"

        report += "\n## Additional Resources\n\n"
        report += "- **Action Logs**: Add `HasActionLogs` trait to your model for action logging\n"
        report += "- **Authorization**: Use `->canSee(fn($request) => ...)` for access control\n"
        report += "- **Custom URI Key**: Set `$uriKey` property for consistent API endpoints\n"
        return report
