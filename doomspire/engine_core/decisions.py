"""
Decisions - Requests the engine sends to player agents mid-resolution.

Every decision kind is its own frozen dataclass carrying only the
fields it needs, and lists the answers it accepts through options().

Resolution stages are generators: a stage yields a DecisionRequest (or
a DecisionBatch when several players answer at once), is resumed with
the answer via send(), and finally returns its result. Stages compose
with ``yield from``, so only the orchestrator ever talks to agents.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import inspect
from typing import Any, Generator, TypeVar, Union

from .errors import AgentError


T = TypeVar("T")


@dataclass(frozen=True)
class TargetPlayerChoice:
    """Pick another player (e.g. who loses food)."""
    prompt: str
    candidates: tuple[str, ...]

    kind = "target_player"

    def options(self) -> list[str]:
        return list(self.candidates)


@dataclass(frozen=True)
class DropItemChoice:
    """Inventory is full: drop a held item for the new one, or leave the new one."""
    prompt: str
    new_item_id: str
    new_item_name: str
    held_item_ids: tuple[str, ...]

    kind = "drop_item"

    def options(self) -> list[str]:
        return [f"drop:{item_id}" for item_id in self.held_item_ids] + ["leave"]


@dataclass(frozen=True)
class YesNoChoice:
    prompt: str
    topic: str

    kind = "yes_no"

    def options(self) -> list[bool]:
        return [True, False]


@dataclass(frozen=True)
class MarketDayChoice:
    """Send a champion to the trader or pay a gold."""
    prompt: str
    champion_ids: tuple[int, ...]
    can_pay: bool

    kind = "market_day"

    def options(self) -> list[str]:
        options = [f"champion-{cid}" for cid in self.champion_ids]
        if self.can_pay:
            options.append("pay-gold")
        return options


@dataclass(frozen=True)
class OptionChoice:
    """Pick one of a fixed list of named options."""
    prompt: str
    topic: str
    choices: tuple[str, ...]

    kind = "option"

    def options(self) -> list[str]:
        return list(self.choices)


Decision = Union[TargetPlayerChoice, DropItemChoice, YesNoChoice, MarketDayChoice, OptionChoice]


@dataclass(frozen=True)
class DecisionRequest:
    """
    One decision, addressed to one player.

    `view` is the game state the decision was raised against, filled in
    by the executor while the action is still being resolved.
    """
    player_name: str
    decision: Decision
    view: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class DecisionBatch:
    """
    Independent decisions answered concurrently.

    The stage is resumed with a dict of player name -> answer; nothing
    may depend on the order the answers arrived in.
    """
    requests: tuple[DecisionRequest, ...]


# A resolution stage: yields requests, receives answers, returns T
Resolution = Generator[Union[DecisionRequest, DecisionBatch], Any, T]


def validate_response(request: DecisionRequest, response: Any) -> Any:
    """Return the response if it is one of the offered options, else raise AgentError."""
    if response not in request.decision.options():
        raise AgentError(
            request.player_name,
            f"answered {response!r} to {request.decision.kind} decision; "
            f"options were {request.decision.options()}",
        )
    return response


def settle(result: Any) -> Resolution[Any]:
    """Let a handler that never asks anything return its value directly."""
    if inspect.isgenerator(result):
        return (yield from result)
    return result


def ask(player_name: str, decision: Decision) -> Resolution[Any]:
    """Yield a single decision and return the validated answer."""
    request = DecisionRequest(player_name, decision)
    response = yield request
    return validate_response(request, response)


def ask_all(requests: list[DecisionRequest]) -> Resolution[dict[str, Any]]:
    """Yield a batch and return validated answers keyed by player name."""
    if not requests:
        return {}
    responses = yield DecisionBatch(tuple(requests))
    answers = {}
    for request in requests:
        if request.player_name not in responses:
            raise AgentError(request.player_name, "no answer in decision batch")
        answers[request.player_name] = validate_response(request, responses[request.player_name])
    return answers


def with_view(resolution: Resolution[T], view: Any) -> Resolution[T]:
    """Pass a stage through, attaching `view` to every request it yields."""
    try:
        request = next(resolution)
    except StopIteration as done:
        return done.value

    while True:
        if isinstance(request, DecisionBatch):
            request = DecisionBatch(tuple(replace(r, view=view) for r in request.requests))
        else:
            request = replace(request, view=view)
        response = yield request
        try:
            request = resolution.send(response)
        except StopIteration as done:
            return done.value
