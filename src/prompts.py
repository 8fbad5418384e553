"""
MCP prompts that assemble how-to and troubleshooting guides from the index
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from config import ConfigurationManager
from doc_indexer import DocIndexer
from models import CodeExample, ScoredResult

logger = logging.getLogger(__name__)


@dataclass
class PromptArgumentInfo:
    name: str
    description: str
    required: bool = False


@dataclass
class GuideStep:
    title: str
    description: str
    code: str = ""
    notes: str = ""
    commands: Optional[List[str]] = None


class DocsPrompt:
    """A named guide template filled in from the documentation index"""

    name: str = ""
    title: str = ""
    description: str = ""
    arguments: Tuple[PromptArgumentInfo, ...] = ()

    def __init__(self, config_manager: ConfigurationManager, indexer: DocIndexer):
        self.config_manager = config_manager
        self.indexer = indexer

    def render(self, arguments: Optional[Dict[str, Any]]) -> str:
        arguments = {k: ("" if v is None else str(v)) for k, v in (arguments or {}).items()}
        try:
            return self.build(arguments)
        except Exception as e:
            logger.error(f"Prompt {self.name} failed: {e}")
            return f"I encountered an error while generating the {self.title.lower()}: {e}"

    def build(self, arguments: Dict[str, str]) -> str:
        raise NotImplementedError

    def initialize_indexer(self):
        self.indexer.index_documents(self.config_manager.documentation_files())


def _render_steps(steps: List[GuideStep], heading: str, show_notes: bool = True) -> str:
    text = ""
    for number, step in enumerate(steps, start=1):
        text += f"### {heading} {number}: {step.title}\n\n{step.description}\n\n"
        if step.code:
            text += f"```php\n{step.code}\n```\n\n"
        if step.commands:
            text += "**Commands to run:**\n"
            for command in step.commands:
                text += f"```bash\n{command}\n```\n"
            text += "\n"
        if step.notes and show_notes:
            text += f"**Note:** {step.notes}\n\n"
    return text


REPOSITORY_STEPS = [
    GuideStep(
        "Create the Repository Class",
        "Create a new repository class that extends the base Repository class.",
        "<?php\n\nnamespace App\\Restify;\n\nuse App\\Models\\User;\n"
        "use Binaryk\\LaravelRestify\\Repositories\\Repository;\n\n"
        "class UserRepository extends Repository\n{\n    public static $model = User::class;\n}",
    ),
    GuideStep(
        "Define Fields",
        "Add the fields method to define which model attributes should be available via the API.",
        "public function fields(RestifyRequest $request): array\n{\n    return [\n"
        "        field('name')->rules('required|max:255'),\n"
        "        field('email')->rules('required|email|unique:users,email,{{resourceId}}'),\n"
        "        field('created_at')->readonly(),\n    ];\n}",
    ),
    GuideStep(
        "Register the Repository",
        "Register your repository in a service provider or routes file.",
        "Restify::repositories([\n    App\\Restify\\UserRepository::class,\n]);",
    ),
]

ADVANCED_REPOSITORY_STEP = GuideStep(
    "Add Advanced Features",
    "Configure additional features like authorization, custom actions, and lifecycle hooks.",
    "public function authorize(RestifyRequest $request): bool\n{\n"
    "    return $request->user()->can('viewAny', static::$model);\n}",
    notes="You can also add filters, actions, and custom endpoints at this stage.",
)

FIELD_STEPS = [
    GuideStep(
        "Choose Field Type",
        "Select the appropriate field type for your data.",
        "field('name'),\nboolean('is_active'),\nbelongsTo('user', UserRepository::class),",
    ),
    GuideStep(
        "Add Validation Rules",
        "Define validation rules for your field.",
        "field('email')\n    ->rules('required|email')\n    ->creationRules('unique:users,email')\n"
        "    ->updateRules('unique:users,email,{{resourceId}}')",
    ),
    GuideStep(
        "Configure Field Behavior",
        "Set visibility, searchability, and other field properties.",
        "field('password')\n    ->rules('required|min:8')\n    ->hideFromIndex()\n    ->hideFromShow()",
    ),
]

ACTION_STEPS = [
    GuideStep(
        "Create Action Class",
        "Create a new action class extending the base Action class.",
        "class PublishPost extends Action\n{\n"
        "    public function handle(ActionRequest $request, Collection $models)\n    {\n"
        "        $models->each(fn ($model) => $model->update(['published_at' => now()]));\n    }\n}",
    ),
    GuideStep(
        "Register the Action",
        "Add the action to your repository's actions method.",
        "public function actions(RestifyRequest $request): array\n{\n    return [\n        new PublishPost,\n    ];\n}",
    ),
]

AUTH_STEPS = [
    GuideStep(
        "Define Authorization",
        "Implement authorization in your repository.",
        "public function authorize(RestifyRequest $request): bool\n{\n"
        "    return $request->user()->can('viewAny', static::$model);\n}",
    ),
]

FILTER_STEPS = [
    GuideStep(
        "Define Searchable Fields",
        "Make fields searchable in your repository.",
        "public static array $search = ['name', 'email'];",
    ),
    GuideStep(
        "Add Match Filters",
        "Define exact match filters.",
        "public static array $match = [\n    'status' => 'string',\n    'category_id' => 'int',\n];",
    ),
]


class RestifyHowTo(DocsPrompt):
    name = "restify-how-to"
    title = "Laravel Restify How-To Guide"
    description = "Step-by-step guide for accomplishing a task with Laravel Restify, backed by the documentation"
    arguments = (
        PromptArgumentInfo(
            "task",
            'What you want to accomplish (e.g., "create a repository", "add custom validation")',
            required=True,
        ),
        PromptArgumentInfo("context", "Additional context about your specific use case or requirements"),
        PromptArgumentInfo("difficulty", 'Preferred explanation level: "beginner", "intermediate", "advanced"'),
    )

    def build(self, arguments: Dict[str, str]) -> str:
        task = arguments.get("task", "").strip()
        if not task:
            return "Please specify what task you want to accomplish with Laravel Restify."

        context = arguments.get("context", "").strip()
        difficulty = (arguments.get("difficulty") or "intermediate").strip().lower()
        if difficulty not in ("beginner", "intermediate", "advanced"):
            difficulty = "intermediate"

        self.initialize_indexer()
        results = self.indexer.search(task, None, 10)
        if not results:
            return self.generic_guide(task)

        guide = f"# How to: {task} with Laravel Restify\n\n"
        if context:
            guide += f"**Your context:** {context}\n\n"
        guide += f"**Difficulty level:** {difficulty.capitalize()}\n\n"

        guide += "## Step-by-Step Guide\n\n"
        guide += _render_steps(self.task_steps(task, difficulty), "Step", show_notes=difficulty != "beginner")

        examples = self.collect_code_examples(results)
        if examples:
            guide += "\n## Code Examples\n\n"
            for example in examples[:3]:
                guide += f"```{example.language}\n{example.code}\n```\n\n"

        guide += "\n## Tips and Best Practices\n\n"
        guide += "- Always follow Laravel coding standards and conventions\n"
        guide += "- Test your implementation thoroughly\n"
        guide += "- Use descriptive names for classes and methods\n"
        guide += "- Consider performance implications for large datasets\n\n"

        guide += "## Common Issues\n\n"
        guide += "If you encounter problems:\n\n"
        guide += "1. Check Laravel logs for error details\n"
        guide += "2. Verify your model relationships are properly defined\n"
        guide += "3. Ensure proper authorization is in place\n"
        guide += "4. Use the `restify-troubleshooting` prompt for specific error messages\n\n"

        guide += "## Next Steps\n\n"
        guide += "**Explore related topics:**\n"
        for title in list(dict.fromkeys(r.document.title for r in results))[:3]:
            guide += f"- {title}\n"
        guide += "\n**Additional tools:**\n"
        guide += "- Use `search-restify-docs` for more detailed information\n"
        guide += "- Use `get-code-examples` for more implementation examples\n"
        guide += "- Use `navigate-docs` to explore documentation structure\n"
        return guide

    @staticmethod
    def task_steps(task: str, difficulty: str) -> List[GuideStep]:
        lowered = task.lower()
        if "repository" in lowered or "create" in lowered:
            steps = list(REPOSITORY_STEPS)
            if difficulty == "advanced":
                steps.append(ADVANCED_REPOSITORY_STEP)
            return steps
        elif "field" in lowered:
            return FIELD_STEPS
        elif "action" in lowered:
            return ACTION_STEPS
        elif "auth" in lowered or "permission" in lowered:
            return AUTH_STEPS
        elif "filter" in lowered or "search" in lowered:
            return FILTER_STEPS

        return [
            GuideStep("Understand the Requirement", f"First, identify what you want to achieve with: {task}"),
            GuideStep("Check Documentation", "Review the Laravel Restify documentation for specific guidance on your task."),
            GuideStep("Implement the Solution", "Follow the documented approach for your specific use case."),
        ]

    @staticmethod
    def collect_code_examples(results: List[ScoredResult]) -> List[CodeExample]:
        examples = []
        for result in results:
            for match in result.matched_code_examples:
                if match.example not in examples:
                    examples.append(match.example)
        return examples[:5]

    @staticmethod
    def generic_guide(task: str) -> str:
        guide = f"# How to: {task} with Laravel Restify\n\n"
        guide += "I don't have specific documentation for this task, but here's a general approach:\n\n"
        guide += "## General Steps\n\n"
        guide += "1. **Research the requirement**: Understand exactly what you need to accomplish\n"
        guide += "2. **Check the documentation**: Look for similar examples in the Laravel Restify docs\n"
        guide += "3. **Start with basics**: Begin with a simple implementation\n"
        guide += "4. **Iterate and improve**: Refine your solution based on requirements\n\n"
        guide += "Try using the `search-restify-docs` tool with more specific terms related to your task.\n"
        return guide


# (category, trigger words, diagnosis, solutions)
ISSUE_PATTERNS = [
    (
        "routing",
        ("route", "404", "not found"),
        "This appears to be a routing issue. The API endpoint may not be properly registered or accessible.",
        [
            GuideStep(
                "Verify Repository Registration",
                "Ensure your repository is properly registered in your service provider or routes file.",
                "Restify::repositories([\n    App\\Restify\\YourRepository::class,\n]);",
            ),
            GuideStep("Check Route Caching", "Clear route cache if you're not seeing new routes.",
                      commands=["php artisan route:clear"]),
            GuideStep("Verify API Middleware", "Check if the correct middleware is applied to your API routes."),
        ],
    ),
    (
        "authentication",
        ("auth", "unauthorized", "401", "403", "forbidden"),
        "This is an authentication or authorization issue. The request is being rejected due to insufficient permissions.",
        [
            GuideStep(
                "Check Repository Authorization",
                "Verify your repository's authorize method is correctly implemented.",
                "public function authorize(RestifyRequest $request): bool\n{\n    return $request->user() !== null;\n}",
            ),
            GuideStep("Verify Authentication Middleware", "Ensure the correct authentication middleware is applied."),
            GuideStep("Check API Token/Session",
                      "Verify that authentication credentials are being passed correctly in requests."),
        ],
    ),
    (
        "validation",
        ("validation", "422", "required"),
        "This is a validation error. Input data doesn't meet the defined validation rules.",
        [
            GuideStep(
                "Review Field Validation Rules",
                "Check the validation rules defined in your repository fields.",
                "field('email')\n    ->rules('required|email')\n    ->creationRules('unique:users,email')",
            ),
            GuideStep("Check Request Data Format",
                      "Ensure the request data matches the expected field names and formats."),
        ],
    ),
    (
        "database",
        ("model", "database", "query", "sql"),
        "This appears to be a database or model-related issue.",
        [
            GuideStep(
                "Verify Model Configuration",
                "Check that your repository is pointing to the correct model.",
                "class YourRepository extends Repository\n{\n    public static $model = App\\Models\\YourModel::class;\n}",
            ),
            GuideStep("Check Database Connection", "Verify your database connection is working.",
                      commands=["php artisan migrate:status"]),
            GuideStep("Review Model Relationships",
                      "Ensure model relationships are properly defined if using relationship fields."),
        ],
    ),
    (
        "fields",
        ("field", "display", "show"),
        "This is related to field configuration or display issues.",
        [
            GuideStep(
                "Check Field Definition",
                "Verify your fields are properly defined in the repository.",
                "public function fields(RestifyRequest $request): array\n{\n    return [\n"
                "        field('name')->rules('required'),\n    ];\n}",
            ),
            GuideStep("Review Field Visibility Rules", "Check if fields are hidden based on visibility rules."),
        ],
    ),
    (
        "performance",
        ("slow", "performance", "timeout"),
        "This appears to be a performance issue that may require optimization.",
        [
            GuideStep(
                "Optimize Database Queries",
                "Review and optimize database queries, add eager loading for relationships.",
                "public static array $with = ['relation1', 'relation2'];",
            ),
            GuideStep("Add Pagination", "Ensure proper pagination is configured for large datasets."),
            GuideStep("Review Indexing", "Check database indexes for frequently queried fields."),
        ],
    ),
]

CONFIGURATION_ISSUE = (
    "configuration",
    (),
    "This may be a configuration issue. Check your setup and environment.",
    [
        GuideStep("Verify Package Installation", "Ensure Laravel Restify is properly installed and configured.",
                  commands=["composer require binaryk/laravel-restify"]),
        GuideStep("Check Service Provider", "Verify the Restify service provider is registered."),
        GuideStep(
            "Clear Application Cache",
            "Clear various caches that might be causing issues.",
            commands=["php artisan config:clear", "php artisan cache:clear"],
        ),
    ],
)

PREVENTION_TIPS = {
    "authentication": ["Test authorization logic thoroughly", "Use Laravel policies for complex authorization rules"],
    "performance": ["Monitor database query performance", "Use Laravel Telescope for debugging in development"],
    "validation": ["Write unit tests for validation rules", "Use form request classes for complex validation"],
}


def diagnose(issue: str, error_message: str = ""):
    """First issue pattern whose trigger words appear in the issue or error text"""
    text = f"{issue} {error_message}".lower()
    for pattern in ISSUE_PATTERNS:
        if any(word in text for word in pattern[1]):
            return pattern
    return CONFIGURATION_ISSUE


class RestifyTroubleshooting(DocsPrompt):
    name = "restify-troubleshooting"
    title = "Laravel Restify Troubleshooting Guide"
    description = "Diagnose a Laravel Restify problem and list likely solutions with related documentation"
    arguments = (
        PromptArgumentInfo("issue", "Description of the problem you're experiencing", required=True),
        PromptArgumentInfo("error_message", "The exact error message, if any"),
        PromptArgumentInfo("context", "What you were doing when the issue occurred"),
        PromptArgumentInfo("code_snippet", "Relevant code that is causing the issue"),
    )

    def build(self, arguments: Dict[str, str]) -> str:
        issue = arguments.get("issue", "").strip()
        if not issue:
            return "Please describe the issue you're experiencing with Laravel Restify."

        error_message = arguments.get("error_message", "").strip()
        context = arguments.get("context", "").strip()
        code_snippet = arguments.get("code_snippet", "").strip()

        self.initialize_indexer()

        guide = "# Laravel Restify Troubleshooting Guide\n\n"
        guide += f"**Issue:** {issue}\n\n"
        if error_message:
            guide += f"**Error message:**\n```\n{error_message}\n```\n\n"
        if context:
            guide += f"**Context:** {context}\n\n"
        if code_snippet:
            guide += f"**Code Context:**\n```php\n{code_snippet}\n```\n\n"

        category, _, diagnosis, solutions = diagnose(issue, error_message)
        guide += f"## Diagnosis\n\n{diagnosis}\n\n"
        guide += "## Possible Solutions\n\n"
        guide += _render_steps(solutions, "Solution")

        guide += self.debugging_steps(category)
        guide += self.prevention_tips(category)

        results = self.indexer.search(issue, None, 3)
        if results:
            guide += "## Related Documentation\n\n"
            for result in results:
                doc = result.document
                guide += f"- **{doc.title}** ({doc.category}): {doc.summary}\n"
            guide += "\n"

        guide += "## Still Having Issues?\n\n"
        guide += "If these solutions don't resolve your problem:\n\n"
        guide += "1. Check the Laravel Restify GitHub issues for similar problems\n"
        guide += "2. Enable debug mode and check Laravel logs\n"
        guide += "3. Use `search-restify-docs` for more specific documentation\n"
        guide += "4. Consider asking on the Laravel community forums\n"
        return guide

    @staticmethod
    def debugging_steps(category: str) -> str:
        steps = "## Debugging Steps\n\n"
        steps += "1. **Enable Debug Mode**\n"
        steps += "   - Set `APP_DEBUG=true` in your `.env` file\n"
        steps += "   - Check `storage/logs/laravel.log` for detailed error messages\n\n"
        steps += "2. **Test API Endpoints**\n"
        steps += "   - Use tools like Postman or curl to test your API endpoints\n\n"
        if category in ("routing", "authentication"):
            steps += "3. **Route Debugging**\n"
            steps += "   - Run `php artisan route:list` to see all registered routes\n\n"
        elif category in ("database", "fields"):
            steps += "3. **Database Debugging**\n"
            steps += "   - Enable query logging to see generated SQL\n\n"
        steps += "4. **Check Dependencies**\n"
        steps += "   - Verify all required packages are installed\n\n"
        return steps

    @staticmethod
    def prevention_tips(category: str) -> str:
        tips = "## Prevention Tips\n\n"
        tips += "To avoid similar issues in the future:\n\n"
        tips += "- Always test changes in a development environment first\n"
        tips += "- Follow Laravel Restify documentation and best practices\n"
        tips += "- Implement proper error handling and logging\n"
        for tip in PREVENTION_TIPS.get(category, []):
            tips += f"- {tip}\n"
        return tips + "\n"
