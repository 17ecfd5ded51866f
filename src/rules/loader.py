import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import Rules

ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "SITE_BASE_URL": ("distribution", "site_base_url"),
    "CARD_VIEW_DEDUPE_SECONDS": ("views", "dedupe_window_seconds"),
}


def _strip_markdown_fences(content: str) -> str:
    """Return the first ```yaml block if the file has one, else the whole file."""
    yaml_lines: list[str] = []
    in_block = False
    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            continue
        if in_block and s_line.startswith("```"):
            return "\n".join(yaml_lines)
        if in_block:
            yaml_lines.append(line)
    return "\n".join(yaml_lines) if in_block else content


def parse_rules(content: str, env: dict[str, str] | None = None) -> Rules:
    """
    Parse and validate rules text, applying environment overrides.

    Raises ValueError for bad YAML or a schema violation.
    """
    try:
        data = yaml.safe_load(_strip_markdown_fences(content)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Rules file must contain a mapping at the top level")

    env = os.environ if env is None else env
    for var, (section, key) in ENV_OVERRIDES.items():
        if env.get(var):
            data.setdefault(section, {})[key] = env[var]

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clear message for the caller/logs
        raise ValueError(f"Rules validation failed:\n{e}") from e


def load_rules(path: Path, env: dict[str, str] | None = None) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")
    return parse_rules(path.read_text(), env)
