"""Report configuration.

Persists settings to ~/.config/npm-report/config.toml
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# tomli-w for writing (tomllib is read-only)
import tomli_w

# tomllib is stdlib in 3.11+, use tomli as fallback for 3.10
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found,no-redef]

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "npm-report"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

DEFAULT_OUTPUT = "npm_security_report.xlsx"
DEFAULT_OUTDATED_COMMAND = "npm outdated --json"
DEFAULT_AUDIT_COMMAND = "npm audit --json"
DEFAULT_UNUSED_COMMAND = "npx depcheck --json"
DEFAULT_FIX_COMMAND = "npm audit fix --force"
DEFAULT_MANUAL_FIX = "Manual review"


@dataclass
class ReportConfig:
    """Commands to run and where to put the workbook."""

    outdated_command: str = DEFAULT_OUTDATED_COMMAND
    audit_command: str = DEFAULT_AUDIT_COMMAND
    unused_command: str = DEFAULT_UNUSED_COMMAND
    output_path: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT))
    fix_command: str = DEFAULT_FIX_COMMAND
    manual_fix: str = DEFAULT_MANUAL_FIX
    timeout: float | None = None  # None waits for each command indefinitely
    cwd: Path | None = None

    # File path for this config (not persisted)
    _path: Path = field(default=DEFAULT_CONFIG_PATH, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization.

        TOML has no null, so unset optional values are left out.
        """
        data: dict[str, Any] = {
            "outdated_command": self.outdated_command,
            "audit_command": self.audit_command,
            "unused_command": self.unused_command,
            "output_path": str(self.output_path),
            "fix_command": self.fix_command,
            "manual_fix": self.manual_fix,
        }
        if self.timeout is not None:
            data["timeout"] = self.timeout
        if self.cwd is not None:
            data["cwd"] = str(self.cwd)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> ReportConfig:
        """Create config from dictionary."""
        cwd = data.get("cwd")
        return cls(
            outdated_command=data.get("outdated_command", DEFAULT_OUTDATED_COMMAND),
            audit_command=data.get("audit_command", DEFAULT_AUDIT_COMMAND),
            unused_command=data.get("unused_command", DEFAULT_UNUSED_COMMAND),
            output_path=Path(data.get("output_path", DEFAULT_OUTPUT)),
            fix_command=data.get("fix_command", DEFAULT_FIX_COMMAND),
            manual_fix=data.get("manual_fix", DEFAULT_MANUAL_FIX),
            timeout=data.get("timeout"),
            cwd=Path(cwd) if cwd else None,
            _path=path or DEFAULT_CONFIG_PATH,
        )

    @property
    def resolved_output(self) -> Path:
        """Workbook path; relative paths land in ``cwd`` when one is set."""
        if self.cwd is not None and not self.output_path.is_absolute():
            return self.cwd / self.output_path
        return self.output_path

    def save(self) -> None:
        """Save configuration to file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "wb") as f:
            tomli_w.dump(self.to_dict(), f)


def load_config(path: Path | None = None) -> ReportConfig:
    """Load configuration from file.

    Args:
        path: Optional custom config path. Defaults to ~/.config/npm-report/config.toml

    Returns:
        ReportConfig with loaded or default settings.
    """
    config_path = path or DEFAULT_CONFIG_PATH

    if not config_path.exists():
        # Return defaults, don't create file until save()
        return ReportConfig(_path=config_path)

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return ReportConfig.from_dict(data, path=config_path)
    except (tomllib.TOMLDecodeError, OSError) as e:
        # If config is corrupt, return defaults but preserve path
        print(f"Warning: Could not load config from {config_path}: {e}", file=sys.stderr)
        return ReportConfig(_path=config_path)


def save_config(config: ReportConfig, path: Path | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Config object to save.
        path: Optional custom path. Uses config's internal path if not provided.

    Returns:
        The path written to.
    """
    if path:
        config._path = path
    config.save()
    return config._path
