"""Dataclasses describing key chords, bindings and editor actions."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIER_ORDER = ("ctrl", "alt", "shift", "meta")

_MODIFIER_ALIASES = {
    "control": "ctrl",
    "cmd": "meta",
    "super": "meta",
    "option": "alt",
}


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {
        _MODIFIER_ALIASES.get(m.strip().lower(), m.strip().lower())
        for m in modifiers
        if m.strip()
    }
    known = tuple(m for m in MODIFIER_ORDER if m in values)
    return known + tuple(sorted(values.difference(MODIFIER_ORDER)))


@dataclass(frozen=True, slots=True)
class KeyChord:
    """One key press plus held modifiers, e.g. ``ctrl+shift+z``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        key = self.key if len(self.key) == 1 else self.key.lower()
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, token: str) -> "KeyChord":
        """Parse ``"ctrl+b"``; a lone ``"+"`` is the plus key."""

        text = token.strip()
        if not text:
            raise ValueError("chord cannot be empty")
        if text == "+" or text.endswith("++"):
            return cls("+", tuple(p for p in text[:-1].split("+") if p))
        *modifiers, key = text.split("+")
        return cls(key, tuple(modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join((*self.modifiers, self.key))
        return self.key


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Context flag a binding requires, e.g. ``heading_line`` or ``!has_selection``."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag or "!" in self.flag:
            raise ValueError(f"invalid context flag {self.flag!r}")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        flag = expression.strip().lstrip("!")
        # Each leading "!" flips the expectation.
        negations = len(expression.strip()) - len(flag)
        return cls(flag.strip(), negations % 2 == 0)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag)) == self.expected

    def __str__(self) -> str:
        return self.flag if self.expected else f"!{self.flag}"


ActionHandler = Callable[..., object]


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A named editor command; ``handler`` receives the session."""

    id: str
    handler: ActionHandler
    description: str = ""
    category: str = "edit"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for action '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Maps one chord onto an action id.

    ``when`` accepts ``WhenClause`` instances or their string form; the
    binding only fires when every clause holds in the session context.
    """

    id: str
    chord: KeyChord
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not (self.id and self.action_id):
            raise ValueError("binding requires both an id and an action_id")
        chord = self.chord if isinstance(self.chord, KeyChord) else KeyChord.parse(self.chord)
        clauses = (self.when,) if isinstance(self.when, (str, WhenClause)) else self.when
        object.__setattr__(self, "chord", chord)
        object.__setattr__(
            self,
            "when",
            tuple(c if isinstance(c, WhenClause) else WhenClause.parse(c) for c in clauses),
        )

    @property
    def key_signature(self) -> str:
        return self.chord.token

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({c.flag: c.expected for c in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)


__all__ = [
    "ActionRef",
    "Binding",
    "KeyChord",
    "WhenClause",
]
