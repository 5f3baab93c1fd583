from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class AutomatonError(ValueError):
    """Base class for errors raised while building or searching an automaton."""


class MalformedInputError(AutomatonError):
    """The postfix expression is empty, unbalanced or contains unknown characters."""


class InvalidArgumentError(AutomatonError):
    """A search was requested with an argument outside its domain."""


class Symbol(Enum):
    """Transition labels. EPSILON uses '' like the FSA dictionary format."""

    A = 'a'
    B = 'b'
    C = 'c'
    EPSILON = ''

    @classmethod
    def from_letter(cls, letter) -> Optional['Symbol']:
        """Return the literal symbol for a letter, or None if it is not one."""
        for symbol in (cls.A, cls.B, cls.C):
            if symbol.value == letter:
                return symbol
        return None

    @property
    def is_epsilon(self) -> bool:
        return self is Symbol.EPSILON


@dataclass(frozen=True)
class Transition:
    source: int
    destination: int
    symbol: Symbol


@dataclass
class State:
    index: int
    start: bool = False
    terminal: bool = False
    epsilon_only: bool = False
    transitions: List[Transition] = field(default_factory=list)


def state_name(index: int) -> str:
    return f"q{index}"


class Automaton:
    """
    An epsilon-NFA with exactly one start and one terminal state.

    States live in an append-only list and are addressed by their index.
    Nothing mutates an automaton once the builder has handed it out.
    """

    def __init__(self, states: List[State], start: int, terminal: int):
        self.states = states
        self.start = start
        self.terminal = terminal

    @property
    def state_count(self) -> int:
        return len(self.states)

    @property
    def transition_count(self) -> int:
        return sum(len(state.transitions) for state in self.states)

    def transitions_from(self, index: int) -> List[Transition]:
        return self.states[index].transitions

    def to_fsa_dict(self) -> Dict:
        """
        Convert to the FSA dictionary format.

        Returns:
            Dict with keys:
            - states: state names q0, q1, ... in index order
            - alphabet: sorted letters that label at least one transition
            - transitions: {state: {symbol: [next_state, ...]}}, epsilon keyed by ''
            - startingState: name of the start state
            - acceptingStates: one-element list holding the terminal state
        """
        alphabet = set()
        transitions = {}
        for state in self.states:
            by_symbol = {}
            for transition in state.transitions:
                symbol = transition.symbol.value
                if not transition.symbol.is_epsilon:
                    alphabet.add(symbol)
                by_symbol.setdefault(symbol, []).append(state_name(transition.destination))
            transitions[state_name(state.index)] = by_symbol

        return {
            'states': [state_name(state.index) for state in self.states],
            'alphabet': sorted(alphabet),
            'transitions': transitions,
            'startingState': state_name(self.start),
            'acceptingStates': [state_name(self.terminal)]
        }

    def __repr__(self):
        return (f"Automaton(states={self.state_count}, transitions={self.transition_count}, "
                f"start={state_name(self.start)}, terminal={state_name(self.terminal)})")
