from typing import Callable, List, Sequence, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style

# (keys, label shown in the help panel)
SUBMIT_KEYS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("enter",), "Enter"),
    (("c-j",), "Ctrl+J"),
)
CLEAR_KEYS: Sequence[Tuple[str, ...]] = (("c-c",),)

PROMPT_STYLE = Style.from_dict({
    "counter": "ansicyan bold",
    "field":   "ansigreen",
    "hint":    "ansibrightblack italic",
})


class KeyBindingManager:
    """Collects the key bindings shared by every prompt of the form."""

    def __init__(self, accept_callback: Callable[[], None], clear_callback: Callable[[], None]):
        self.bindings = KeyBindings()
        self.submit_labels: List[str] = []

        for keys, label in SUBMIT_KEYS:
            self._bind(keys, accept_callback)
            self.submit_labels.append(label)
        for keys in CLEAR_KEYS:
            self._bind(keys, clear_callback)

    def _bind(self, keys: Tuple[str, ...], callback: Callable[[], None]):
        @self.bindings.add(*keys)
        def _(event):
            callback()


class SessionFactory:
    @staticmethod
    def build_session(bindings: KeyBindings) -> PromptSession:
        return PromptSession(
            key_bindings=bindings,
            history=InMemoryHistory(),
            style=PROMPT_STYLE,
            multiline=False,
        )

    @staticmethod
    def make_prompt_fragments(counter: int, field: str, hint: str = "") -> FormattedText:
        fragments = [
            ("class:counter", f"[{counter}] "),
            ("class:field", f"{field}"),
        ]
        if hint:
            fragments.append(("class:hint", f" ({hint})"))
        fragments.append(("", "> "))
        return FormattedText(fragments)
