"""Centralized input routing.

Transforms raw pygame events into high-level *actions* depending on the
active state, so states never parse key codes themselves.

- A dict from state name -> list of rules processed in declaration order.
- Each rule is a function(event) -> action|None. The first matching rule
  adds its action to the output list. Duplicate actions in one frame are
  collapsed preserving order of first occurrence.
- Mouse clicks on upgrade buttons need positions, so UpgradeState reads
  those from the raw events instead.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List

import pygame

Action = str
Rule = Callable[[pygame.event.Event], Action | None]


def _key_rule(key: int, action: Action, event_type=pygame.KEYDOWN) -> Rule:
    def _r(e: pygame.event.Event):  # type: ignore[override]
        if e.type == event_type and getattr(e, "key", None) == key:
            return action
        return None

    return _r


class InputRouter:
    """Maps pygame events to semantic actions for the active state."""

    def __init__(self, key_bindings: Dict[str, Dict[str, List[int]]] | None = None) -> None:
        self._rules: Dict[str, List[Rule]] = {}
        self._register_default_rules(key_bindings)

    def _register_default_rules(self, key_bindings) -> None:
        if key_bindings is None:
            from bowgame.settings import settings

            key_bindings = settings.key_bindings

        for state_name, binds in key_bindings.items():
            rules: List[Rule] = []
            for act, keys in binds.items():
                rules.extend(_key_rule(k, act) for k in keys)
            self._rules[state_name] = rules

    def process(self, events: Iterable[pygame.event.Event], state_name: str) -> List[Action]:
        rules = self._rules.get(state_name, [])
        actions: List[Action] = []
        for e in events:
            for rule in rules:
                a = rule(e)
                if a:
                    if a not in actions:  # de-duplicate per frame
                        actions.append(a)
                    break  # stop at first rule match for this event
        return actions


__all__ = ["InputRouter", "Action"]
