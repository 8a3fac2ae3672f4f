"""Theme loader - YAML serialization and deserialization for Theme.

Lets a house style be reviewed, version-controlled and edited as a
human-readable YAML file instead of being passed as keyword arguments.
"""

from pathlib import Path

import yaml

from .theme import Theme


def dump_theme(theme: Theme) -> str:
    """Render a Theme as a YAML document."""
    return yaml.dump(theme.to_dict(), default_flow_style=False, sort_keys=False,
                     allow_unicode=True, width=120)


def save_theme(theme: Theme, path: str | Path) -> None:
    """Serialize a Theme to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(dump_theme(theme))


def load_theme(path: str | Path) -> Theme:
    """Deserialize a Theme from a YAML file. Missing keys keep their defaults."""
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Theme file {path} must contain a mapping, got {type(data).__name__}")
    return Theme.from_dict(data)
