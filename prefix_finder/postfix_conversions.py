from typing import Dict, List, NamedTuple

from loguru import logger

from .automaton import Automaton, MalformedInputError, State, Symbol, Transition

EPSILON_ATOM = '1'
CONCAT = '.'
UNION = '+'
KLEENE = '*'

LITERALS = {'a': Symbol.A, 'b': Symbol.B, 'c': Symbol.C, EPSILON_ATOM: Symbol.EPSILON}
OPERATORS = {CONCAT: 2, UNION: 2, KLEENE: 1}


class Fragment(NamedTuple):
    start: int
    terminal: int
    epsilon_only: bool


class PostfixNFABuilder:
    """Helper class to fold a postfix expression into an NFA."""

    def __init__(self):
        self.states: List[State] = []
        self.fragments: List[Fragment] = []

    def new_state(self, start: bool = False, terminal: bool = False) -> int:
        """Append a new state and return its index."""
        self.states.append(State(len(self.states), start=start, terminal=terminal))
        return len(self.states) - 1

    def add_transition(self, from_state: int, to_state: int, symbol: Symbol):
        """Add a transition."""
        self.states[from_state].transitions.append(Transition(from_state, to_state, symbol))

    def push(self, fragment: Fragment):
        self.states[fragment.start].epsilon_only = fragment.epsilon_only
        self.fragments.append(fragment)

    def pop(self, operator: str, position: int) -> Fragment:
        if not self.fragments:
            raise MalformedInputError(
                f"Operator '{operator}' at position {position} needs "
                f"{OPERATORS[operator]} operand(s)"
            )
        return self.fragments.pop()

    def push_atom(self, char: str):
        """Two fresh states joined by a single transition labelled with the atom."""
        start = self.new_state(start=True)
        terminal = self.new_state(terminal=True)
        self.add_transition(start, terminal, LITERALS[char])
        self.push(Fragment(start, terminal, char == EPSILON_ATOM))

    def concat(self, position: int):
        second = self.pop(CONCAT, position)
        first = self.pop(CONCAT, position)

        self.states[first.terminal].terminal = False
        self.states[second.start].start = False
        self.add_transition(first.terminal, second.start, Symbol.EPSILON)

        self.push(Fragment(first.start, second.terminal,
                           first.epsilon_only and second.epsilon_only))

    def union(self, position: int):
        second = self.pop(UNION, position)
        first = self.pop(UNION, position)

        for fragment in (first, second):
            self.states[fragment.start].start = False
            self.states[fragment.terminal].terminal = False

        start = self.new_state(start=True)
        terminal = self.new_state(terminal=True)
        self.add_transition(start, first.start, Symbol.EPSILON)
        self.add_transition(start, second.start, Symbol.EPSILON)
        self.add_transition(first.terminal, terminal, Symbol.EPSILON)
        self.add_transition(second.terminal, terminal, Symbol.EPSILON)

        self.push(Fragment(start, terminal, first.epsilon_only and second.epsilon_only))

    def kleene(self, position: int):
        fragment = self.pop(KLEENE, position)

        # A loop over a fragment that only matches the empty string adds nothing
        if fragment.epsilon_only:
            self.fragments.append(fragment)
            return

        self.add_transition(fragment.terminal, fragment.start, Symbol.EPSILON)
        self.states[fragment.terminal].terminal = False
        self.states[fragment.terminal].epsilon_only = False
        self.states[fragment.start].terminal = True

        self.push(Fragment(fragment.start, fragment.start, fragment.epsilon_only))

    def to_automaton(self) -> Automaton:
        if len(self.fragments) != 1:
            raise MalformedInputError(
                f"Expression leaves {len(self.fragments)} unjoined operands, expected 1"
            )
        fragment = self.fragments[0]
        return Automaton(self.states, fragment.start, fragment.terminal)


def postfix_to_nfa(expression: str) -> Automaton:
    """
    Convert a postfix regular expression to an epsilon-NFA.

    Args:
        expression (str): Postfix expression over the atoms a, b, c and 1
            (the empty string) with the operators '.' (concatenation),
            '+' (union) and '*' (Kleene star). Example: "ab+c.*" is
            ((a|b)c)* in infix notation.

    Returns:
        Automaton: the constructed NFA with one start and one terminal state

    Raises:
        MalformedInputError: if the expression is empty, contains an unknown
            character or is not a balanced postfix expression.
    """
    if not isinstance(expression, str):
        raise MalformedInputError(f"Expression must be a string, got {type(expression).__name__}")
    if not expression:
        raise MalformedInputError("Expression is empty")

    builder = PostfixNFABuilder()
    for position, char in enumerate(expression):
        if char in LITERALS:
            builder.push_atom(char)
        elif char == CONCAT:
            builder.concat(position)
        elif char == UNION:
            builder.union(position)
        elif char == KLEENE:
            builder.kleene(position)
        else:
            raise MalformedInputError(f"Unexpected character '{char}' at position {position}")

    automaton = builder.to_automaton()
    logger.debug("Built {!r} from postfix expression '{}'", automaton, expression)
    return automaton


def validate_postfix_syntax(expression: str) -> Dict[str, any]:
    """
    Validate a postfix expression by building it.

    Returns:
        Dict with 'valid' (bool) and optional 'error' (str) keys
    """
    try:
        postfix_to_nfa(expression)
        return {'valid': True}
    except MalformedInputError as e:
        return {'valid': False, 'error': str(e)}
