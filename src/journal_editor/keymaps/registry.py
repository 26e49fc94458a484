"""Keymap registry: editor actions plus the chords that trigger them."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from journal_editor.runtime.telemetry import SpanHandle, span

from .models import ActionRef, Binding, KeyChord


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    chords: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


class KeymapConflictError(RuntimeError):
    """Raised when a binding would fire on the same chord and context as another."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' on '{binding.key_signature}' conflicts with "
            f"{[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


def _token(chord: KeyChord | str) -> str:
    return chord.token if isinstance(chord, KeyChord) else KeyChord.parse(chord).token


def _same_gate(left: Binding, right: Binding) -> bool:
    """Bindings on one chord clash only when gated by identical ``when`` clauses.

    Differently gated bindings may both match a context; ``resolve`` then
    picks by priority and specificity.
    """

    return dict(left.when_map) == dict(right.when_map)


class KeymapRegistry:
    """Owns action references and the chord bindings pointing at them."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_chord: Dict[str, List[str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def _trace(self, operation: str, **metadata: object) -> AbstractContextManager[SpanHandle]:
        return span(
            f"keymaps::{operation}",
            logger_name=self._logger_name,
            component="keymaps",
            metadata=dict(metadata),
        )

    def revision(self) -> int:
        return self._revision

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with self._trace("register_action", action_id=action.id):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` any clashing binding is evicted."""

        with self._trace(
            "register_binding", binding_id=binding.id, chord=binding.key_signature
        ) as handle:
            self._require_action(binding, handle)
            clashes = self.detect_conflicts(binding, ignore=(binding.id,))
            previous = self._bindings.get(binding.id)
            if not replace:
                if clashes:
                    handle.add_metadata("conflicts", ",".join(b.id for b in clashes))
                    raise KeymapConflictError(binding, clashes)
                if previous is not None:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
            for stale in (*clashes, previous):
                if stale is not None:
                    self._drop(stale)
            self._store(binding)
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with self._trace("unregister_binding", binding_id=binding_id):
            binding = self._bindings.get(binding_id)
            if binding is None:
                return None
            self._drop(binding)
            self._revision += 1
            return binding

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        """Apply dataclass field ``changes`` to an existing binding."""

        with self._trace("update_binding", binding_id=binding_id) as handle:
            current = self._bindings.get(binding_id)
            if current is None:
                handle.fail("missing_binding")
                raise KeyError(f"Binding '{binding_id}' not found")
            updated = replace(current, **changes)
            self._require_action(updated, handle)
            clashes = self.detect_conflicts(updated, ignore=(binding_id,))
            if clashes:
                handle.add_metadata("conflicts", ",".join(b.id for b in clashes))
                raise KeymapConflictError(updated, clashes)
            self._drop(current)
            self._store(updated)
            return updated

    def iter_bindings(self, chord: KeyChord | str | None = None) -> Iterator[Binding]:
        if chord is None:
            yield from self._bindings.values()
            return
        for binding_id in self._by_chord.get(_token(chord), ()):
            yield self._bindings[binding_id]

    def resolve(
        self, chord: KeyChord | str, context: Optional[Mapping[str, bool]] = None
    ) -> Optional[ResolutionMatch]:
        """Highest-priority binding for ``chord`` whose ``when`` clauses hold."""

        ctx = context or {}
        candidates = [b for b in self.iter_bindings(chord) if b.allows(ctx)]
        if not candidates:
            return None
        # More specific bindings (more when clauses) win priority ties.
        best = max(candidates, key=lambda b: (b.priority, len(b.when)))
        return ResolutionMatch(binding=best, action=self._actions[best.action_id])

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            chords=tuple(sorted(self._by_chord)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        skipped = set(ignore or ())
        return [
            other
            for other in self.iter_bindings(binding.chord)
            if other.id not in skipped and _same_gate(binding, other)
        ]

    def _require_action(self, binding: Binding, handle: SpanHandle) -> None:
        if binding.action_id not in self._actions:
            handle.add_metadata("missing_action", binding.action_id)
            raise KeyError(
                f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
            )

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._by_chord.setdefault(binding.key_signature, []).append(binding.id)
        self._revision += 1

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        ids = self._by_chord.get(binding.key_signature, [])
        if binding.id in ids:
            ids.remove(binding.id)
        if not ids:
            self._by_chord.pop(binding.key_signature, None)


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
]
