"""
Configuration - Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. Project config (.orchestration/config.yaml)
  3. User config (~/.intentgate/config.yaml)
  4. Defaults

Thresholds and paths are policy, not protocol. Changing them never
changes the pipeline's contract.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .presentation.symbols import get_symbols
from .tracking.classifier import DEFAULT_LINE_THRESHOLD, DEFAULT_SIZE_THRESHOLD


logger = logging.getLogger(__name__)

APPROVAL_MODES = ("prompt", "auto", "deny")


@dataclass
class PathsConfig:
    """Where intentgate reads and writes, relative to the workspace."""
    orchestration_dir: str = ".orchestration"
    catalog: str = "active_intents.yaml"
    trace: str = "agent_trace.jsonl"
    ignore_file: str = ".intentignore"
    lessons_file: str = "AGENTS.md"

    def validate(self) -> Optional[str]:
        for name in ("orchestration_dir", "catalog", "trace", "ignore_file", "lessons_file"):
            value = getattr(self, name)
            if not value:
                return f"paths.{name} must not be empty"
            if Path(value).is_absolute():
                return f"paths.{name} must be relative to the workspace: {value}"
        return None


@dataclass
class ClassifierConfig:
    """Mutation classification thresholds."""
    size_threshold: int = DEFAULT_SIZE_THRESHOLD
    line_threshold: int = DEFAULT_LINE_THRESHOLD

    def validate(self) -> Optional[str]:
        if self.size_threshold <= 0:
            return f"classifier.size_threshold must be positive, got {self.size_threshold}"
        if self.line_threshold <= 0:
            return f"classifier.line_threshold must be positive, got {self.line_threshold}"
        return None


@dataclass
class ContributorConfig:
    """Who is credited in trace entries."""
    entity_type: str = "AI"
    model_identifier: str = "unknown"

    def validate(self) -> Optional[str]:
        valid = ("AI", "HUMAN", "MIXED")
        if self.entity_type not in valid:
            return f"Unknown entity type '{self.entity_type}'. Valid: {', '.join(valid)}"
        return None


@dataclass
class ApprovalConfig:
    """Human-in-the-loop settings."""
    mode: str = "prompt"      # "prompt" | "auto" | "deny"
    timeout: float = 300.0    # seconds; a timeout rejects

    def validate(self) -> Optional[str]:
        if self.mode not in APPROVAL_MODES:
            return f"Unknown approval mode '{self.mode}'. Valid: {', '.join(APPROVAL_MODES)}"
        if self.timeout <= 0:
            return f"approval.timeout must be positive, got {self.timeout}"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"

    def validate(self) -> Optional[str]:
        valid_symbols = ("unicode", "ascii", "auto")
        if self.symbols not in valid_symbols:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(valid_symbols)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    contributor: ContributorConfig = field(default_factory=ContributorConfig)
    approval: ApprovalConfig = field(default_factory=ApprovalConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def sections(self) -> Dict[str, Any]:
        return {
            "paths": self.paths,
            "classifier": self.classifier,
            "contributor": self.contributor,
            "approval": self.approval,
            "display": self.display,
        }

    def validate(self) -> Optional[str]:
        for section in self.sections().values():
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            name: dict(vars(section))
            for name, section in self.sections().items()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary. Unknown keys are ignored."""
        paths = data.get("paths", {}) or {}
        classifier = data.get("classifier", {}) or {}
        contributor = data.get("contributor", {}) or {}
        approval = data.get("approval", {}) or {}
        display = data.get("display", {}) or {}

        return cls(
            paths=PathsConfig(
                orchestration_dir=paths.get("orchestration_dir", ".orchestration"),
                catalog=paths.get("catalog", "active_intents.yaml"),
                trace=paths.get("trace", "agent_trace.jsonl"),
                ignore_file=paths.get("ignore_file", ".intentignore"),
                lessons_file=paths.get("lessons_file", "AGENTS.md"),
            ),
            classifier=ClassifierConfig(
                size_threshold=int(classifier.get("size_threshold", DEFAULT_SIZE_THRESHOLD)),
                line_threshold=int(classifier.get("line_threshold", DEFAULT_LINE_THRESHOLD)),
            ),
            contributor=ContributorConfig(
                entity_type=contributor.get("entity_type", "AI"),
                model_identifier=contributor.get("model_identifier", "unknown"),
            ),
            approval=ApprovalConfig(
                mode=approval.get("mode", "prompt"),
                timeout=float(approval.get("timeout", 300.0)),
            ),
            display=DisplayConfig(
                symbols=display.get("symbols", "auto"),
            ),
        )


# Settings that hold numbers, and how to coerce them from strings
_COERCE = {
    ("classifier", "size_threshold"): int,
    ("classifier", "line_threshold"): int,
    ("approval", "timeout"): float,
}


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment (INTENTGATE_MODEL, INTENTGATE_APPROVAL_MODE)
      2. Project config (.orchestration/config.yaml)
      3. User config (~/.intentgate/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".intentgate"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".orchestration"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read_yaml(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read_yaml(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("INTENTGATE_MODEL"):
            config_data.setdefault("contributor", {})["model_identifier"] = os.environ["INTENTGATE_MODEL"]
        if os.environ.get("INTENTGATE_APPROVAL_MODE"):
            config_data.setdefault("approval", {})["mode"] = os.environ["INTENTGATE_APPROVAL_MODE"]

        self._config = Config.from_dict(config_data)

        error = self._config.validate()
        if error:
            logger.warning("Invalid configuration: %s", error)

        return self._config

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self.USER_CONFIG_DIR.mkdir(parents=True, exist_ok=True)

        with open(self.user_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "approval.mode")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'approval.mode')"

        section_name, setting = parts
        sections = config.sections()

        if section_name not in sections:
            return f"Unknown section: {section_name}. Valid: {', '.join(sections)}"

        section = sections[section_name]
        if setting not in vars(section):
            valid = ", ".join(vars(section))
            return f"Unknown {section_name} setting: {setting}. Valid: {valid}"

        coerce = _COERCE.get((section_name, setting), str)
        try:
            coerced = coerce(value)
        except ValueError:
            return f"{key} expects a {coerce.__name__}, got '{value}'"

        previous = getattr(section, setting)
        setattr(section, setting, coerced)

        error = section.validate()
        if error:
            setattr(section, setting, previous)
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section = config.sections().get(parts[0])
        if section is None or parts[1] not in vars(section):
            return None
        return str(getattr(section, parts[1]))

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level must be a mapping", path)
            return {}
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()
        symbols = get_symbols(config.display.symbols)

        error = config.validate()
        status = f"{symbols.check_fail} {error}" if error else f"{symbols.check_pass} Valid"

        lines = ["Configuration:", ""]
        for name, section in config.sections().items():
            lines.append(f"{name.capitalize()}:")
            for setting, value in vars(section).items():
                lines.append(f"  {setting}: {value}")
            lines.append("")

        lines.extend([
            f"Status: {status}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ])

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
