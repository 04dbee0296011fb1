"""Application states.

A small stack-based state manager drives the front end:

    sm = StateManager()
    sm.set(GameState())
    while running:
        events = pygame.event.get()
        sm.handle_actions(router.process(events, sm.current.name))
        sm.handle(events)
        sm.update(dt)
        sm.render(screen)

- ``GameState`` owns the ``Simulation`` and steps it once per frame.
- ``UpgradeState`` is an overlay pushed on top of the game while an
  upgrade choice is pending. It keeps stepping the game underneath (the
  simulation itself stays frozen, but the clock and the auto-upgrade
  countdown keep running) and closes once the offer is resolved.

Transitions are requested through flags (``request_upgrade``, ``closed``,
``quit_requested``) and carried out by the main loop in ``app.py``.
"""

from __future__ import annotations

from typing import Callable, List, Sequence

import pygame

from bowgame.logger import get_logger
from bowgame.renderer import Renderer, button_at
from bowgame.simulation import Simulation

_state_log = get_logger("state")


class State:
    """Base class for an application state. All hooks default to no-ops."""

    name: str = "State"
    manager: "StateManager | None" = None

    # Lifecycle -----------------------------------------------------
    def on_enter(self, previous: "State | None") -> None:  # pragma: no cover - default no-op
        pass

    def on_exit(self, next_state: "State | None") -> None:  # pragma: no cover - default no-op
        pass

    # Main loop hooks -----------------------------------------------
    def handle(self, events: Sequence[pygame.event.Event]) -> None:  # pragma: no cover - default no-op
        pass

    def handle_actions(self, actions: Sequence[str]) -> None:  # pragma: no cover
        pass

    def update(self, dt: float) -> None:  # pragma: no cover - default no-op
        pass

    def render(self, surface: pygame.Surface) -> None:  # pragma: no cover - default no-op
        pass


class StateManager:
    """Stack-based state manager. Only the top state receives loop callbacks."""

    def __init__(self) -> None:
        self._stack: List[State] = []
        _state_log.debug("StateManager init (empty stack)")

    # Introspection -------------------------------------------------
    @property
    def current(self) -> State | None:
        return self._stack[-1] if self._stack else None

    def stack_size(self) -> int:
        return len(self._stack)

    # Transitions ---------------------------------------------------
    def push(self, state: State) -> None:
        state.manager = self
        prev = self.current
        self._stack.append(state)
        state.on_enter(prev)
        _state_log.debug("push", state.name, "-> stack:", [s.name for s in self._stack])

    def pop(self) -> State | None:
        if not self._stack:
            return None
        top = self._stack.pop()
        next_state = self.current
        top.on_exit(next_state)
        _state_log.debug("pop", top.name, "-> stack:", [s.name for s in self._stack])
        return top

    def set(self, state: State) -> None:
        state.manager = self
        while self._stack:
            popped = self._stack.pop()
            popped.on_exit(None if not self._stack else state)
            _state_log.debug("discard", popped.name)
        self._stack.append(state)
        state.on_enter(None)
        _state_log.debug("set", state.name, "(root)")

    # Loop dispatch -------------------------------------------------
    def handle(self, events: Sequence[pygame.event.Event]) -> None:
        if self.current:
            self.current.handle(events)

    def handle_actions(self, actions: Sequence[str]) -> None:
        if self.current:
            if actions:
                _state_log.debug("actions ->", self.current.name, actions)
            self.current.handle_actions(actions)

    def update(self, dt: float) -> None:
        if self.current:
            self.current.update(dt)

    def render(self, surface: pygame.Surface) -> None:
        if self.current:
            self.current.render(surface)


class GameState(State):
    name = "GameState"

    def __init__(
        self,
        simulation: Simulation | None = None,
        time_source: Callable[[], float] = pygame.time.get_ticks,
        renderer: Renderer | None = None,
    ) -> None:
        self._time_source = time_source
        if simulation is None:
            from bowgame.rng_service import RNGService
            from bowgame.settings import settings

            rng = RNGService.initialize(settings.seed)
            simulation = Simulation(start_ms=time_source(), rng=rng, auto_upgrade=settings.auto_upgrade)
        self.simulation = simulation
        self.renderer = renderer if renderer is not None else Renderer()
        self.request_upgrade = False
        self.quit_requested = False

    def handle_actions(self, actions: Sequence[str]) -> None:
        for act in actions:
            if act == "auto_toggle":
                self.simulation.toggle_auto_upgrade()
            elif act == "quit":
                self.quit_requested = True

    def advance(self):
        """Step the simulation to the current time."""
        return self.simulation.step(self._time_source())

    def update(self, dt: float) -> None:
        self.advance()
        self.request_upgrade = bool(self.simulation.pending_choices())

    def render(self, surface: pygame.Surface) -> None:
        self.renderer.render(surface, self.simulation.snapshot())


class UpgradeState(State):
    name = "UpgradeState"

    def __init__(self, game_state: GameState) -> None:
        self.game_state = game_state
        self.closed = False
        self.quit_requested = False

    @property
    def simulation(self) -> Simulation:
        return self.game_state.simulation

    def on_enter(self, previous: "State | None") -> None:
        self.game_state.request_upgrade = False
        _state_log.debug("upgrade choices:", self.simulation.pending_choices())

    def _choose(self, index: int) -> None:
        if index < len(self.simulation.pending_choices()):
            self.simulation.select_upgrade(index)

    def handle(self, events: Sequence[pygame.event.Event]) -> None:
        surface = pygame.display.get_surface()
        if surface is None:
            return
        count = len(self.simulation.pending_choices())
        for e in events:
            if e.type == pygame.MOUSEBUTTONDOWN and getattr(e, "button", None) == 1:
                idx = button_at(surface.get_size(), count, e.pos)
                if idx is not None:
                    self._choose(idx)

    def handle_actions(self, actions: Sequence[str]) -> None:
        for act in actions:
            if act == "upgrade_0":
                self._choose(0)
            elif act == "upgrade_1":
                self._choose(1)
            elif act == "auto_toggle":
                self.simulation.toggle_auto_upgrade()
            elif act == "quit":
                self.quit_requested = True

    def update(self, dt: float) -> None:
        self.game_state.advance()
        if not self.simulation.pending_choices():
            self.closed = True

    def render(self, surface: pygame.Surface) -> None:
        # The snapshot carries the pending choices, so the game render
        # already includes the upgrade panel.
        self.game_state.render(surface)


__all__ = ["State", "StateManager", "GameState", "UpgradeState"]
