"""Tests for {{name=default}} parameter substitution."""

from inlined_copy.lib.parameter_processor import ParameterProcessor, find_parameters


class TestFindParameters:
    """Tests for placeholder discovery."""

    def test_ordered_unique(self) -> None:
        """Test that names are listed once in order of first appearance."""
        text = "{{b}} {{a=1}} {{b=2}} {{a=3}}"
        assert find_parameters(text) == [("b", ""), ("a", "1")]

    def test_names_and_defaults_trimmed(self) -> None:
        """Test that whitespace around names and defaults is dropped."""
        assert find_parameters("{{ lang = Python }}") == [("lang", "Python")]

    def test_no_placeholders(self) -> None:
        """Test that plain text yields no parameters."""
        assert find_parameters("{ single } braces") == []


class TestParameterProcessor:
    """Tests for substitution."""

    def test_defaults_without_prompt(self) -> None:
        """Test that defaults are used when no prompt is configured."""
        processor = ParameterProcessor()
        assert processor.process("Hi {{name=World}}{{suffix}}!") == "Hi World!"

    def test_prompted_once_per_name(self) -> None:
        """Test that every occurrence of a name receives one answer."""
        asked: list[tuple[str, str]] = []

        def prompt(name: str, default: str) -> str:
            asked.append((name, default))
            return name.upper()

        result = ParameterProcessor(prompt=prompt).process("{{x}} {{y=1}} {{x}}")
        assert result == "X Y X"
        assert asked == [("x", ""), ("y", "1")]

    def test_none_answer_uses_default(self) -> None:
        """Test that a prompt returning None falls back to the default."""
        processor = ParameterProcessor(prompt=lambda name, default: None)  # type: ignore[arg-type,return-value]
        assert processor.process("{{a=fallback}}") == "fallback"

    def test_values_are_inserted_literally(self) -> None:
        """Test that backslashes in answers are not treated as escapes."""
        processor = ParameterProcessor(prompt=lambda name, default: r"C:\new\1")
        assert processor.process("path={{p}}") == r"path=C:\new\1"

    def test_nested_placeholders_in_values(self) -> None:
        """Test that placeholders introduced by answers are substituted too."""
        answers = {"greeting": "Hello {{who=there}}", "who": "friend"}
        processor = ParameterProcessor(prompt=lambda name, default: answers[name])
        assert processor.process("{{greeting}}") == "Hello friend"

    def test_depth_limit(self) -> None:
        """Test that text beyond the depth limit is returned unchanged."""
        processor = ParameterProcessor(max_recursion_depth=0)
        assert processor.process("{{a=1}}", current_depth=1) == "{{a=1}}"
