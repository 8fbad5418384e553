"""
PHP source templates for the generated Restify artifacts

Every artifact is rendered through ``render_artifact(kind, params)``. The
params mapping always carries ``namespace`` and ``class_name``; the other
keys depend on the kind:

- repository: ``model_class``, ``model_base_name``, ``fields``, ``relationships``
- actions: ``model_name``, ``model_class``, ``validation_rules``, ``uri_key``
- getters: ``scope``, ``model_name``, ``model_class``, ``uri_key``
- match filters: ``attribute``, ``filter_type``, ``partial``, ``custom_logic``
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from naming import camel, plural, studly

RESTIFY_REQUEST = "Binaryk\\LaravelRestify\\Http\\Requests\\RestifyRequest"
ACTION_REQUEST = "Binaryk\\LaravelRestify\\Http\\Requests\\ActionRequest"
JSON_RESPONSE = "Illuminate\\Http\\JsonResponse"
HTTP_REQUEST = "Illuminate\\Http\\Request"


class ArtifactKind(Enum):
    REPOSITORY = "repository"
    INDEX_ACTION = "index"
    SHOW_ACTION = "show"
    STANDALONE_ACTION = "standalone"
    INVOKABLE_ACTION = "invokable"
    DESTRUCTIVE_ACTION = "destructive"
    INVOKABLE_GETTER = "invokable-getter"
    EXTENDED_GETTER = "extended-getter"
    MATCH_FILTER = "match-filter"
    CUSTOM_MATCH_FILTER = "custom-match-filter"

    @classmethod
    def for_action(cls, action_type: str) -> "ArtifactKind":
        return cls(action_type)

    @classmethod
    def for_getter(cls, getter_type: str) -> "ArtifactKind":
        return cls(f"{getter_type}-getter")

    @classmethod
    def for_filter(cls, filter_type: str) -> "ArtifactKind":
        return cls.CUSTOM_MATCH_FILTER if filter_type == "custom" else cls.MATCH_FILTER

    @property
    def is_action(self) -> bool:
        return self in ACTION_KINDS

    @property
    def is_getter(self) -> bool:
        return self in (ArtifactKind.INVOKABLE_GETTER, ArtifactKind.EXTENDED_GETTER)


ACTION_KINDS = (
    ArtifactKind.INDEX_ACTION,
    ArtifactKind.SHOW_ACTION,
    ArtifactKind.STANDALONE_ACTION,
    ArtifactKind.INVOKABLE_ACTION,
    ArtifactKind.DESTRUCTIVE_ACTION,
)


def render_artifact(kind: ArtifactKind, params: Dict[str, Any]) -> str:
    """Render the full PHP file for one artifact"""
    if kind == ArtifactKind.REPOSITORY:
        parts = _repository_parts(params)
    elif kind.is_action:
        parts = _action_parts(kind, params)
    elif kind.is_getter:
        parts = _getter_parts(kind, params)
    elif kind in (ArtifactKind.MATCH_FILTER, ArtifactKind.CUSTOM_MATCH_FILTER):
        parts = _match_filter_parts(kind, params)
    else:
        raise ValueError(f"Unsupported artifact kind: {kind}")

    return _php_class(
        namespace=params["namespace"],
        class_name=params["class_name"],
        imports=parts["imports"],
        base_class=parts.get("base_class"),
        properties=parts.get("properties", []),
        methods=parts.get("methods", []),
    )


def _php_class(
    namespace: str,
    class_name: str,
    imports: List[str],
    base_class: Optional[str],
    properties: List[str],
    methods: List[str],
) -> str:
    uses = "\n".join(f"use {name};" for name in sorted(set(imports)))
    declaration = f"class {class_name}"
    if base_class:
        declaration += f" extends {base_class}"

    body = ""
    if properties:
        body += "\n".join(properties) + "\n"
        if methods:
            body += "\n"
    body += "\n\n".join(methods)

    return (
        "<?php\n\n"
        "declare(strict_types=1);\n\n"
        f"namespace {namespace};\n\n"
        f"{uses}\n\n"
        f"{declaration}\n"
        "{\n"
        f"{body}\n"
        "}\n"
    )


def _repository_parts(params: Dict[str, Any]) -> Dict[str, Any]:
    fields = params.get("fields") or ["            id(),"]
    relationships = params.get("relationships") or []
    imports = [RESTIFY_REQUEST, "Binaryk\\LaravelRestify\\Repository", params["model_class"]]
    if relationships:
        imports += ["Binaryk\\LaravelRestify\\Fields\\BelongsTo", "Binaryk\\LaravelRestify\\Fields\\HasMany"]

    methods = [
        "    public function fields(RestifyRequest $request): array\n"
        "    {\n"
        "        return [\n"
        + "\n".join(fields) + "\n"
        "        ];\n"
        "    }"
    ]
    if relationships:
        methods.append(
            "    public static function include(): array\n"
            "    {\n"
            "        return [\n"
            + "\n".join(relationships) + "\n"
            "        ];\n"
            "    }"
        )

    return {
        "imports": imports,
        "base_class": "Repository",
        "properties": [f"    public static $model = {params['model_base_name']}::class;"],
        "methods": methods,
    }


def _json_response(message: str, extra: str = "") -> str:
    return (
        "        return response()->json([\n"
        f"            'message' => '{message}',\n"
        f"{extra}"
        "        ]);\n"
    )


def _action_parts(kind: ArtifactKind, params: Dict[str, Any]) -> Dict[str, Any]:
    model_name = params.get("model_name")
    rules = params.get("validation_rules") or {}
    imports: List[str] = []
    properties: List[str] = []
    base_class: Optional[str] = "Action"

    if kind == ArtifactKind.INVOKABLE_ACTION:
        imports.append(HTTP_REQUEST)
        base_class = None
    elif kind == ArtifactKind.DESTRUCTIVE_ACTION:
        imports += ["Binaryk\\LaravelRestify\\Actions\\DestructiveAction", ACTION_REQUEST, JSON_RESPONSE]
        base_class = "DestructiveAction"
    else:
        imports += ["Binaryk\\LaravelRestify\\Actions\\Action", ACTION_REQUEST, JSON_RESPONSE]

    if params.get("model_class") and kind != ArtifactKind.STANDALONE_ACTION:
        imports.append(params["model_class"])
    if kind in (ArtifactKind.INDEX_ACTION, ArtifactKind.DESTRUCTIVE_ACTION):
        imports.append("Illuminate\\Support\\Collection")

    if params.get("uri_key"):
        properties.append(f"    public static string $uriKey = '{params['uri_key']}';")
    if kind == ArtifactKind.STANDALONE_ACTION:
        properties.append("    public bool $standalone = true;")

    validation = "\n        $request->validate($this->rules());\n" if rules else ""

    if kind == ArtifactKind.INVOKABLE_ACTION:
        handle = (
            "    public function __invoke(Request $request)\n"
            "    {" + validation + "\n"
            + _json_response("Action completed successfully")
            + "    }"
        )
    elif kind == ArtifactKind.SHOW_ACTION:
        variable = "$" + camel(model_name) if model_name else "$model"
        parameter = f"{studly(model_name)} {variable}" if model_name else f"Model {variable}"
        handle = (
            f"    public function handle(ActionRequest $request, {parameter}): JsonResponse\n"
            "    {" + validation + "\n"
            "        // Perform action on single model\n"
            f"        // {variable}->update(['status' => 'processed']);\n\n"
            + _json_response("Action completed successfully")
            + "    }"
        )
    elif kind == ArtifactKind.STANDALONE_ACTION:
        handle = (
            "    public function handle(ActionRequest $request): JsonResponse\n"
            "    {" + validation + "\n"
            "        // Perform standalone action (no models involved)\n"
            "        // Example: $request->user()->update(['some_field' => 'value']);\n\n"
            + _json_response("Action completed successfully")
            + "    }"
        )
    else:
        collection = "$" + camel(plural(model_name)) if model_name else "$models"
        handle = (
            f"    public function handle(ActionRequest $request, Collection {collection}): JsonResponse\n"
            "    {" + validation + "\n"
            "        // Perform action on multiple models\n"
            f"        // {collection}->each(function ($model) {{\n"
            "        //     $model->update(['status' => 'processed']);\n"
            "        // });\n\n"
            + _json_response("Action completed successfully", f"            'processed' => {collection}->count(),\n")
            + "    }"
        )

    methods = [handle]
    if rules:
        methods.append(_rules_method(rules))
    if kind == ArtifactKind.INDEX_ACTION and model_name:
        imports.append(RESTIFY_REQUEST)
        methods.append(
            "    public static function indexQuery(RestifyRequest $request, $query)\n"
            "    {\n"
            "        // Customize the query before models are retrieved\n"
            "        // Example: $query->where('status', 'active');\n"
            "    }"
        )

    return {"imports": imports, "base_class": base_class, "properties": properties, "methods": methods}


def _rules_method(rules: Dict[str, Any]) -> str:
    lines = []
    for field_name, rule in rules.items():
        if isinstance(rule, (list, tuple)):
            value = "['" + "', '".join(str(r) for r in rule) + "']"
        else:
            value = f"'{rule}'"
        lines.append(f"            '{field_name}' => {value}")

    return (
        "    public function rules(): array\n"
        "    {\n"
        "        return [\n"
        + ",\n".join(lines) + ",\n"
        "        ];\n"
        "    }"
    )


def _getter_parts(kind: ArtifactKind, params: Dict[str, Any]) -> Dict[str, Any]:
    scope = params.get("scope", "both")
    model_name = params.get("model_name")
    imports = [JSON_RESPONSE, HTTP_REQUEST]
    base_class = None
    if kind == ArtifactKind.EXTENDED_GETTER:
        imports.append("Binaryk\\LaravelRestify\\Getters\\Getter")
        base_class = "Getter"

    if params.get("model_class") and scope != "index":
        imports.append(params["model_class"])

    properties = []
    if params.get("uri_key"):
        properties.append(f"    public static $uriKey = '{params['uri_key']}';")

    method_name = "__invoke" if kind == ArtifactKind.INVOKABLE_GETTER else "handle"
    signature = f"    public function {method_name}(Request $request"
    if scope == "show" and model_name:
        variable = "$" + camel(model_name)
        signature += f", {studly(model_name)} {variable}"
        hint = (
            "        // Get additional data for the specific model\n"
            f"        // Example: $additionalData = {variable}->someRelationship;\n\n"
        )
    else:
        hint = (
            "        // Get additional data for the repository\n"
            "        // Example: $stats = $request->user()->getStats();\n\n"
        )

    method = (
        signature + "): JsonResponse\n"
        "    {\n"
        + hint
        + "        return response()->json([\n"
        "            'data' => [\n"
        "                'message' => 'Getter executed successfully',\n"
        "                // Add your custom data here\n"
        "            ],\n"
        "        ]);\n"
        "    }"
    )

    return {"imports": imports, "base_class": base_class, "properties": properties, "methods": [method]}


def filter_logic(attribute: str, filter_type: str, partial: bool) -> str:
    """Body of ``filter()`` for the built-in match types"""
    if filter_type in ("string", "text"):
        if partial:
            return f"        return $query->where('{attribute}', 'LIKE', \"%{{$value}}%\");"
        return f"        return $query->where('{attribute}', $value);"
    elif filter_type in ("int", "integer"):
        return f"        return $query->where('{attribute}', (int) $value);"
    elif filter_type in ("bool", "boolean"):
        return f"        return $query->where('{attribute}', filter_var($value, FILTER_VALIDATE_BOOLEAN));"
    elif filter_type == "datetime":
        return (
            "        // Handle single date or date range\n"
            "        if (str_contains($value, ',')) {\n"
            "            [$start, $end] = explode(',', $value, 2);\n"
            f"            return $query->whereBetween('{attribute}', [$start, $end]);\n"
            "        }\n\n"
            f"        return $query->whereDate('{attribute}', $value);"
        )
    elif filter_type == "between":
        return (
            "        // Expects comma-separated values: value1,value2\n"
            "        if (str_contains($value, ',')) {\n"
            "            [$start, $end] = explode(',', $value, 2);\n"
            f"            return $query->whereBetween('{attribute}', [$start, $end]);\n"
            "        }\n\n"
            f"        return $query->where('{attribute}', $value);"
        )
    elif filter_type == "array":
        return (
            "        // Handle comma-separated values or array\n"
            "        $values = is_array($value) ? $value : explode(',', $value);\n"
            f"        return $query->whereIn('{attribute}', $values);"
        )
    return f"        return $query->where('{attribute}', $value);"


def _custom_filter_logic(attribute: str, custom_logic: Optional[str]) -> str:
    comment = f"// {custom_logic}" if custom_logic else "// Add your custom filtering logic here"
    return (
        f"        {comment}\n\n"
        "        // Example implementations:\n"
        f"        // return $query->where('{attribute}', 'LIKE', \"%{{$value}}%\");\n"
        f"        // return $query->whereIn('{attribute}', is_array($value) ? $value : [$value]);\n\n"
        f"        return $query->where('{attribute}', $value);"
    )


def _match_filter_parts(kind: ArtifactKind, params: Dict[str, Any]) -> Dict[str, Any]:
    attribute = params["attribute"]
    if kind == ArtifactKind.CUSTOM_MATCH_FILTER:
        logic = _custom_filter_logic(attribute, params.get("custom_logic"))
    else:
        logic = filter_logic(attribute, params.get("filter_type", "string"), bool(params.get("partial")))

    filter_method = (
        "    /**\n"
        "     * Apply the filter to the query.\n"
        "     */\n"
        "    public function filter(RestifyRequest $request, Builder|Relation $query, $value)\n"
        "    {\n"
        f"{logic}\n"
        "    }"
    )
    name_method = (
        "    public function name(): string\n"
        "    {\n"
        f"        return '{attribute}';\n"
        "    }"
    )

    return {
        "imports": [
            "Binaryk\\LaravelRestify\\Filters\\MatchFilter",
            RESTIFY_REQUEST,
            "Illuminate\\Database\\Eloquent\\Builder",
            "Illuminate\\Database\\Eloquent\\Relations\\Relation",
        ],
        "base_class": "MatchFilter",
        "methods": [filter_method, name_method],
    }
