import logging
from pathlib import Path

import yaml

from .prompt import Prompt

logger = logging.getLogger(__name__)

BUNDLED_PROMPTS_DIR = Path(__file__).parent / "templates"


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) if part.isdigit() else 0 for part in version.split("."))


class PromptsLibrary:
    """Versioned prompts read from a directory of YAML files.

    Defaults to the prompts shipped with the package. Several versions of the
    same prompt may live side by side; callers pin one with `get` or take the
    newest with `latest`.
    """

    def __init__(self, directory: str | Path = BUNDLED_PROMPTS_DIR) -> None:
        self._by_name: dict[str, dict[str, Prompt]] = {}
        for path in sorted(Path(directory).glob("*.yaml")):
            self._add(self._read(path), path)
        logger.info(
            "Loaded %d prompts from %s", sum(map(len, self._by_name.values())), directory
        )

    def get(self, name: str, version: str) -> Prompt:
        prompt = self._by_name.get(name, {}).get(version)
        if prompt is None:
            logger.error("Prompt not found: name=%s, version=%s", name, version)
            raise KeyError(f"Prompt '{name}' version '{version}' not found")
        return prompt

    def latest(self, name: str) -> Prompt:
        """Highest version of a prompt, compared numerically (`1.10` > `1.9`)."""
        versions = self._by_name.get(name)
        if not versions:
            logger.error("Prompt not found: name=%s", name)
            raise KeyError(f"Prompt '{name}' not found")
        return versions[max(versions, key=_version_key)]

    def list(self) -> list[tuple[str, str]]:
        return [(name, v) for name, versions in self._by_name.items() for v in versions]

    def _add(self, prompt: Prompt, source: Path) -> None:
        self._by_name.setdefault(prompt.name, {})[prompt.version] = prompt
        logger.debug("Loaded prompt %s v%s from %s", prompt.name, prompt.version, source)

    @staticmethod
    def _read(path: Path) -> Prompt:
        with open(path, encoding="utf-8") as f:
            return Prompt(**yaml.safe_load(f))
