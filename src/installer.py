"""
Detect AI code environments and register the MCP server in their config files
"""

import getpass
import json
import logging
import os
import platform as platform_module
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

SERVER_KEY = "laravel-restify"
SERVER_COMMAND = "restify-docs"
MCP_SERVERS_KEY = "mcpServers"
PROJECT_MCP_FILE = ".mcp.json"
CLINE_SETTINGS = "globalStorage/rooveterinaryinc.roo-cline/settings/cline_mcp_settings.json"


def current_platform() -> str:
    return {"Darwin": "mac", "Linux": "linux", "Windows": "windows"}.get(platform_module.system(), "unknown")


def merge_mcp_server(path: Path, key: str, entry: Dict[str, Any]) -> bool:
    """Add or replace ``mcpServers.<key>`` in a JSON config file, keeping other entries"""
    config: Dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                config = loaded
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Replacing unreadable MCP config {path}: {e}")

    servers = config.get(MCP_SERVERS_KEY)
    if not isinstance(servers, dict):
        servers = {}
    servers[key] = {k: v for k, v in entry.items() if v}
    config[MCP_SERVERS_KEY] = servers

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=4)
    except OSError as e:
        logger.error(f"Could not write MCP config {path}: {e}")
        return False

    logger.info(f"Registered '{key}' in {path}")
    return True


class CodeEnvironment:
    """An editor or assistant that reads MCP servers from a JSON file"""

    name: str = ""
    display_name: str = ""
    use_absolute_path: bool = True

    def __init__(self, home: Optional[Path] = None, platform: Optional[str] = None):
        self.home = Path(home) if home else Path.home()
        self.platform = platform or current_platform()

    def system_paths(self) -> List[Path]:
        return []

    def project_files(self) -> List[str]:
        return []

    def mcp_config_path(self) -> Optional[Path]:
        return None

    def detect_on_system(self) -> bool:
        return any(path.exists() for path in self.system_paths())

    def detect_in_project(self, base_path: Path) -> bool:
        return any((Path(base_path) / name).exists() for name in self.project_files())

    def server_command(self) -> str:
        if self.use_absolute_path:
            return shutil.which(SERVER_COMMAND) or SERVER_COMMAND
        return SERVER_COMMAND

    def install_mcp(self, key: str, args: List[str], env: Optional[Dict[str, str]] = None) -> bool:
        path = self.mcp_config_path()
        if path is None:
            return False
        return merge_mcp_server(path, key, {"command": self.server_command(), "args": args, "env": env or {}})

    def _appdata(self) -> Path:
        return Path(os.environ.get("APPDATA", self.home / "AppData" / "Roaming"))


class ClaudeDesktop(CodeEnvironment):
    name = "claudedesktop"
    display_name = "Claude Desktop"

    def system_paths(self) -> List[Path]:
        user = getpass.getuser()
        if self.platform == "mac":
            return [
                Path("/Applications/Claude.app"),
                Path("/System/Applications/Claude.app"),
                Path(f"/Users/{user}/Applications/Claude.app"),
            ]
        elif self.platform == "windows":
            return [
                Path(f"C:\\Users\\{user}\\AppData\\Local\\Programs\\claude\\Claude.exe"),
                Path("C:\\Program Files\\Claude\\Claude.exe"),
            ]
        elif self.platform == "linux":
            return [Path("/usr/bin/claude"), Path("/usr/local/bin/claude"), Path("/opt/claude/claude")]
        return []

    def project_files(self) -> List[str]:
        return [".claude_desktop_config.json"]

    def mcp_config_path(self) -> Optional[Path]:
        if self.platform in ("mac", "linux"):
            return self.home / ".config" / "claude" / "claude_desktop_config.json"
        elif self.platform == "windows":
            return self._appdata() / "Claude" / "claude_desktop_config.json"
        return None


class VSCode(CodeEnvironment):
    name = "vscode"
    display_name = "Visual Studio Code"
    app_dir = "Code"

    def system_paths(self) -> List[Path]:
        user = getpass.getuser()
        if self.platform == "mac":
            return [
                Path("/Applications/Visual Studio Code.app"),
                Path("/System/Applications/Visual Studio Code.app"),
                Path(f"/Users/{user}/Applications/Visual Studio Code.app"),
            ]
        elif self.platform == "windows":
            return [
                Path(f"C:\\Users\\{user}\\AppData\\Local\\Programs\\Microsoft VS Code\\Code.exe"),
                Path("C:\\Program Files\\Microsoft VS Code\\Code.exe"),
            ]
        elif self.platform == "linux":
            return [Path("/usr/bin/code"), Path("/usr/local/bin/code"), Path("/opt/visual-studio-code/code")]
        return []

    def project_files(self) -> List[str]:
        return [".vscode/settings.json"]

    def mcp_config_path(self) -> Optional[Path]:
        if self.platform == "mac":
            base = self.home / "Library" / "Application Support" / self.app_dir / "User"
        elif self.platform == "linux":
            base = self.home / ".config" / self.app_dir / "User"
        elif self.platform == "windows":
            base = self._appdata() / self.app_dir / "User"
        else:
            return None
        return base / CLINE_SETTINGS


class Cursor(VSCode):
    name = "cursor"
    display_name = "Cursor"
    app_dir = "Cursor"

    def system_paths(self) -> List[Path]:
        user = getpass.getuser()
        if self.platform == "mac":
            return [
                Path("/Applications/Cursor.app"),
                Path("/System/Applications/Cursor.app"),
                Path(f"/Users/{user}/Applications/Cursor.app"),
            ]
        elif self.platform == "windows":
            return [
                Path(f"C:\\Users\\{user}\\AppData\\Local\\Programs\\cursor\\Cursor.exe"),
                Path("C:\\Program Files\\Cursor\\Cursor.exe"),
            ]
        elif self.platform == "linux":
            return [Path("/usr/bin/cursor"), Path("/usr/local/bin/cursor"), Path("/opt/cursor/cursor")]
        return []

    def project_files(self) -> List[str]:
        return [".cursor/settings.json", ".vscode/settings.json"]


ENVIRONMENTS = (ClaudeDesktop, VSCode, Cursor)


class CodeEnvironmentsDetector:
    def __init__(self, home: Optional[Path] = None, platform: Optional[str] = None):
        self.environments = [env_class(home, platform) for env_class in ENVIRONMENTS]

    def discover_system_installed(self) -> List[CodeEnvironment]:
        return [env for env in self.environments if env.detect_on_system()]

    def discover_project_installed(self, base_path: Path) -> List[CodeEnvironment]:
        return [env for env in self.environments if env.detect_in_project(base_path)]


def install(project_root: Path, detector: Optional[CodeEnvironmentsDetector] = None) -> List[str]:
    """Register the server for every detected environment plus the project's .mcp.json"""
    project_root = Path(project_root).resolve()
    detector = detector or CodeEnvironmentsDetector()
    args = ["start"]
    env = {"RESTIFY_DOCS_PROJECT_ROOT": str(project_root)}

    report = []
    if merge_mcp_server(project_root / PROJECT_MCP_FILE, SERVER_KEY, {"command": SERVER_COMMAND, "args": args}):
        report.append(f"Project: {project_root / PROJECT_MCP_FILE}")

    detected = {env_.name: env_ for env_ in detector.discover_system_installed()}
    for env_ in detector.discover_project_installed(project_root):
        detected.setdefault(env_.name, env_)

    if not detected:
        report.append("No AI code environments detected; only the project .mcp.json was written")
    for environment in detected.values():
        if environment.install_mcp(SERVER_KEY, args, env):
            report.append(f"{environment.display_name}: {environment.mcp_config_path()}")
        else:
            report.append(f"{environment.display_name}: could not write MCP config")
    return report
