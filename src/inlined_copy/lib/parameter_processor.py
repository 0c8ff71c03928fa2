"""Parameter placeholder substitution.

Placeholders are written ``{{name}}`` or ``{{name=default}}``. Each distinct
name is asked for once and every occurrence receives the same answer.
"""

import re
from collections.abc import Callable

from inlined_copy.lib.logging_config import get_logger

logger = get_logger(__name__)

PARAMETER_PATTERN = re.compile(r"\{\{([^=}]+)(?:=([^}]+))?\}\}")

# Called with (name, default) and returns the value to substitute
PromptCallback = Callable[[str, str], str]


def find_parameters(text: str) -> list[tuple[str, str]]:
    """List distinct parameters in order of first appearance.

    Args:
        text: Text containing placeholders

    Returns:
        ``(name, default)`` pairs; the default is empty when absent and the
        first default written for a name wins
    """
    parameters: dict[str, str] = {}
    for match in PARAMETER_PATTERN.finditer(text):
        name = match.group(1).strip()
        default = match.group(2).strip() if match.group(2) else ""
        parameters.setdefault(name, default)
    return list(parameters.items())


class ParameterProcessor:
    """Replaces parameter placeholders with user supplied values.

    Attributes:
        prompt: Callback asked for each parameter value; when None the
            defaults are used
        max_recursion_depth: How many times substituted values are scanned
            again for placeholders
    """

    def __init__(
        self, prompt: PromptCallback | None = None, max_recursion_depth: int = 1
    ) -> None:
        self.prompt = prompt
        self.max_recursion_depth = max_recursion_depth

    def process(self, text: str, current_depth: int = 0) -> str:
        """Substitute every placeholder in ``text``.

        Args:
            text: Text containing placeholders
            current_depth: Nesting level of this call

        Returns:
            Text with placeholders replaced, or ``text`` unchanged when the
            depth limit is exceeded
        """
        if current_depth > self.max_recursion_depth:
            logger.debug(
                f"Parameter depth {current_depth} exceeds maximum "
                f"{self.max_recursion_depth}, returning text as is"
            )
            return text

        parameters = find_parameters(text)
        if not parameters:
            return text

        values = {name: self._ask(name, default) for name, default in parameters}
        result = PARAMETER_PATTERN.sub(lambda m: values[m.group(1).strip()], text)

        if any(PARAMETER_PATTERN.search(value) for value in values.values()):
            return self.process(result, current_depth + 1)
        return result

    def _ask(self, name: str, default: str) -> str:
        if self.prompt is None:
            return default
        value = self.prompt(name, default)
        return value if value is not None else default
