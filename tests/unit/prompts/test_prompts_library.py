from pathlib import Path

import pytest

from study_kit.prompts import BUNDLED_PROMPTS_DIR, Prompt, PromptsLibrary


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """Create a temp directory with sample YAML prompt files."""
    (tmp_path / "abridge.yaml").write_text(
        """name: abridge
version: "1.0"
description: Shorten a passage
inputs:
  text: The passage to shorten
template: Shorten this passage, {{ text }}
"""
    )

    # Same prompt, later versions
    (tmp_path / "abridge_v2.yaml").write_text(
        """name: abridge
version: "1.9"
description: Shorten a passage to a word budget
inputs:
  text: The passage to shorten
  max_words: Word budget
template: Shorten to {{ max_words }} words. {{text}}
"""
    )
    (tmp_path / "abridge_v3.yaml").write_text(
        """name: abridge
version: "1.10"
description: Shorten a passage within a word range
inputs:
  text: The passage to shorten
  min_words: Lower bound
  max_words: Upper bound
template: Shorten to {{ min_words }}-{{ max_words }} words. {{ text }}
"""
    )

    (tmp_path / "explain.yaml").write_text(
        """name: explain
version: "1.0"
description: Explain a quiz answer
inputs:
  question: The question
  answer: The correct answer
template: |
  Explain why "{{ answer }}" answers: {{ question }}
"""
    )

    return tmp_path


class TestPromptsLibrary:
    def test_loads_prompts_from_directory(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(str(prompts_dir))

        assert len(library.list()) == 4

    def test_get_prompt_by_name_and_version(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(prompts_dir)

        prompt = library.get("abridge", "1.0")

        assert prompt.name == "abridge"
        assert prompt.version == "1.0"
        assert prompt.description == "Shorten a passage"
        assert prompt.inputs == {"text": "The passage to shorten"}
        assert prompt.template == "Shorten this passage, {{ text }}"

    def test_get_raises_keyerror_for_unknown_prompt(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(prompts_dir)

        with pytest.raises(KeyError, match="Prompt 'unknown' version '1.0' not found"):
            library.get("unknown", "1.0")

    def test_get_raises_keyerror_for_unknown_version(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(prompts_dir)

        with pytest.raises(KeyError, match="Prompt 'abridge' version '9.9' not found"):
            library.get("abridge", "9.9")

    def test_latest_compares_versions_numerically(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(prompts_dir)

        assert library.latest("abridge").version == "1.10"

    def test_latest_raises_for_unknown_prompt(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(prompts_dir)

        with pytest.raises(KeyError, match="Prompt 'missing' not found"):
            library.latest("missing")

    def test_list_returns_name_version_tuples(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(prompts_dir)

        prompts = library.list()

        assert ("abridge", "1.0") in prompts
        assert ("abridge", "1.10") in prompts
        assert ("explain", "1.0") in prompts

    def test_empty_directory_loads_no_prompts(self, tmp_path: Path) -> None:
        library = PromptsLibrary(tmp_path)

        assert library.list() == []

    def test_unknown_field_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "bad.yaml").write_text(
            """name: bad
version: "1.0"
description: Has an extra field
inputs: {}
template: nothing
author: someone
"""
        )

        with pytest.raises(ValueError):
            PromptsLibrary(tmp_path)

    def test_bundled_prompts_available(self) -> None:
        library = PromptsLibrary()

        assert library.latest("summarize_segment").inputs.keys() == {
            "text",
            "min_words",
            "max_words",
        }
        assert library.latest("refine_question").inputs.keys() == {
            "question",
            "options",
            "correct",
        }
        assert BUNDLED_PROMPTS_DIR.is_dir()


class TestPromptRender:
    def test_substitutes_placeholders_with_and_without_spaces(
        self, prompts_dir: Path
    ) -> None:
        prompt = PromptsLibrary(prompts_dir).get("abridge", "1.9")

        assert prompt.render(text="Cells divide.", max_words=5) == (
            "Shorten to 5 words. Cells divide."
        )

    def test_values_are_not_reinterpreted(self, prompts_dir: Path) -> None:
        prompt = PromptsLibrary(prompts_dir).get("abridge", "1.0")

        rendered = prompt.render(text="{{ text }} stays literal")

        assert rendered == "Shorten this passage, {{ text }} stays literal"

    def test_missing_input_raises(self, prompts_dir: Path) -> None:
        prompt = PromptsLibrary(prompts_dir).get("explain", "1.0")

        with pytest.raises(KeyError, match="missing inputs: answer"):
            prompt.render(question="Why?")

    def test_unknown_input_raises(self, prompts_dir: Path) -> None:
        prompt = PromptsLibrary(prompts_dir).get("abridge", "1.0")

        with pytest.raises(ValueError, match="unknown inputs: tone"):
            prompt.render(text="x", tone="formal")

    def test_prompt_is_pydantic_model(self, prompts_dir: Path) -> None:
        prompt = PromptsLibrary(prompts_dir).get("explain", "1.0")

        assert isinstance(prompt, Prompt)
