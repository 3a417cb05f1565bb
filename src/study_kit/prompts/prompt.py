import re

from pydantic import BaseModel

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Prompt(BaseModel):
    name: str
    version: str
    description: str
    inputs: dict[str, str]
    template: str

    class Config:
        extra = "forbid"

    def render(self, **values: object) -> str:
        """Substitute `{{ name }}` placeholders.

        Raises:
            KeyError: If an input declared by the prompt is missing.
            ValueError: If a value is given that the prompt doesn't declare.
        """
        missing = [name for name in self.inputs if name not in values]
        if missing:
            raise KeyError(
                f"Prompt '{self.name}' v{self.version} missing inputs: "
                f"{', '.join(sorted(missing))}"
            )
        unknown = [name for name in values if name not in self.inputs]
        if unknown:
            raise ValueError(
                f"Prompt '{self.name}' v{self.version} got unknown inputs: "
                f"{', '.join(sorted(unknown))}"
            )
        return _PLACEHOLDER.sub(lambda m: str(values[m.group(1)]), self.template)
