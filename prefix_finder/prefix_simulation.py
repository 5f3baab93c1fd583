from typing import Dict, List, Optional, Tuple

from loguru import logger

from .automaton import Automaton, InvalidArgumentError, Symbol, state_name
from .postfix_conversions import postfix_to_nfa

Pair = Tuple[int, int]


def _validate_number(number) -> None:
    # bool is an int subclass but never a meaningful budget
    if isinstance(number, bool) or not isinstance(number, int):
        raise InvalidArgumentError(f"Number of letters must be an integer, got {number!r}")
    if number < 0:
        raise InvalidArgumentError(f"Number of letters must be non-negative, got {number}")


def find_prefix_path(automaton: Automaton, letter: str, number: int) -> Optional[List[Tuple[str, str, str]]]:
    """
    Find a walk from the start state that consumes exactly `number` copies of `letter`.

    Epsilon transitions may be taken freely between letters. The walk does not
    have to end in the terminal state.

    The search runs depth first over (state, remaining) pairs. A state is only
    expanded again when it is reached with a strictly smaller remaining budget
    than every budget it was expanded with before. Reaching it with the same
    budget means an epsilon cycle was closed without consuming anything, and
    reaching it with a larger budget cannot succeed where the smaller one did
    not, because any walk consuming k letters has a prefix consuming fewer.

    Args:
        automaton: The NFA to search
        letter: The letter to consume. Letters with no matching transition
            can only succeed for number == 0.
        number: How many letters to consume (non-negative)

    Returns:
        The walk as [(state, symbol, next_state), ...] with '' as the symbol of
        epsilon moves, or None if no such walk exists.

    Raises:
        InvalidArgumentError: if number is negative or not an integer
    """
    _validate_number(number)
    symbol = Symbol.from_letter(letter)

    visited = set()
    last_budget = [number] * automaton.state_count
    parents: Dict[Pair, Tuple[Optional[Pair], str]] = {}

    stack = [(automaton.start, number, None, '')]
    while stack:
        state, remaining, parent, label = stack.pop()

        if remaining == 0:
            parents[(state, remaining)] = (parent, label)
            path = _rebuild_path(parents, (state, remaining))
            logger.debug("Found prefix of {} x '{}' after {} steps", number, letter, len(path))
            return path

        if state in visited and last_budget[state] <= remaining:
            continue
        visited.add(state)
        last_budget[state] = remaining
        parents[(state, remaining)] = (parent, label)

        # Reversed so the first listed transition is explored first
        for transition in reversed(automaton.transitions_from(state)):
            if transition.symbol.is_epsilon:
                stack.append((transition.destination, remaining, (state, remaining), ''))
            elif transition.symbol is symbol:
                stack.append((transition.destination, remaining - 1, (state, remaining), letter))

    logger.debug("No prefix of {} x '{}' (expanded {} states)", number, letter, len(parents))
    return None


def _rebuild_path(parents: Dict[Pair, Tuple[Optional[Pair], str]], pair: Pair) -> List[Tuple[str, str, str]]:
    path = []
    parent, label = parents[pair]
    while parent is not None:
        path.append((state_name(parent[0]), label, state_name(pair[0])))
        pair = parent
        parent, label = parents[pair]
    path.reverse()
    return path


def has_prefix_path(automaton: Automaton, letter: str, number: int) -> bool:
    """Return True if some walk from the start consumes exactly `number` copies of `letter`."""
    return find_prefix_path(automaton, letter, number) is not None


def find_prefix(expression: str, letter: str, number: int) -> bool:
    """Build the NFA for a postfix expression and search it."""
    return has_prefix_path(postfix_to_nfa(expression), letter, number)
