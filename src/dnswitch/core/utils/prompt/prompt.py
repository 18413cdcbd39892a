"""Base prompt handling and UI components."""

from collections.abc import Callable

from prompt_toolkit import prompt as toolkit_prompt
from prompt_toolkit.validation import Validator
from rich.console import Console
from rich.status import Status

console = Console()

INVALID_CHOICE = "Invalid input. Please enter a valid number."


def is_valid_choice(text: str, max_choice: int) -> bool:
    """Check that ``text`` is a number between 1 and ``max_choice``."""
    text = text.strip()
    return text.isdigit() and 1 <= int(text) <= max_choice


class PromptHandler:
    """Base class for handling terminal prompts and UI."""

    def __init__(
        self,
        ask: Callable[..., str] | None = None,
        output: Console | None = None,
    ) -> None:
        """Initialize the PromptHandler.

        Args:
            ask: Line reader with the signature of ``prompt_toolkit.prompt``
            output: Console to render to (default: the shared console)
        """
        self._ask = ask or toolkit_prompt
        self.console = output or console

    def ask_text(self, message: str) -> str:
        """Read one line of free text."""
        return self._ask(message).strip()

    def ask_choice(self, max_choice: int) -> int:
        """Read a menu number, asking again until it is in range."""
        validator = Validator.from_callable(
            lambda text: is_valid_choice(text, max_choice),
            error_message=INVALID_CHOICE,
            move_cursor_to_end=True,
        )
        while True:
            answer = self._ask("Please enter the number of your choice: ", validator=validator)
            if is_valid_choice(answer, max_choice):
                return int(answer.strip())
            self.console.print(f"[red]{INVALID_CHOICE}")

    def status(self, message: str) -> Status:
        """Spinner shown while an external command runs."""
        return self.console.status(message, spinner="dots")
