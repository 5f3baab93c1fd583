import unittest
from prefix_finder.automaton import MalformedInputError, Symbol
from prefix_finder.postfix_conversions import (
    postfix_to_nfa,
    validate_postfix_syntax,
    PostfixNFABuilder,
    Fragment
)


def _flagged(automaton, flag):
    return [state.index for state in automaton.states if getattr(state, flag)]


class TestPostfixConversions(unittest.TestCase):

    def test_single_letter(self):
        automaton = postfix_to_nfa('a')
        self.assertEqual(automaton.state_count, 2)
        self.assertEqual(automaton.start, 0)
        self.assertEqual(automaton.terminal, 1)

        transitions = automaton.transitions_from(0)
        self.assertEqual(len(transitions), 1)
        self.assertEqual(transitions[0].destination, 1)
        self.assertEqual(transitions[0].symbol, Symbol.A)
        self.assertEqual(automaton.transitions_from(1), [])

    def test_epsilon_atom_uses_epsilon_transition(self):
        automaton = postfix_to_nfa('1')
        self.assertEqual(automaton.transitions_from(0)[0].symbol, Symbol.EPSILON)
        self.assertTrue(automaton.states[0].epsilon_only)

        self.assertFalse(postfix_to_nfa('c').states[0].epsilon_only)

    def test_concatenation(self):
        automaton = postfix_to_nfa('ab.')
        fsa = automaton.to_fsa_dict()

        self.assertEqual(fsa['states'], ['q0', 'q1', 'q2', 'q3'])
        self.assertEqual(fsa['alphabet'], ['a', 'b'])
        self.assertEqual(fsa['startingState'], 'q0')
        self.assertEqual(fsa['acceptingStates'], ['q3'])
        self.assertEqual(fsa['transitions']['q0'], {'a': ['q1']})
        self.assertEqual(fsa['transitions']['q1'], {'': ['q2']})
        self.assertEqual(fsa['transitions']['q2'], {'b': ['q3']})
        self.assertEqual(fsa['transitions']['q3'], {})

        # Inner boundary flags are cleared
        self.assertFalse(automaton.states[1].terminal)
        self.assertFalse(automaton.states[2].start)

    def test_union(self):
        automaton = postfix_to_nfa('ab+')
        fsa = automaton.to_fsa_dict()

        self.assertEqual(automaton.state_count, 6)
        self.assertEqual(fsa['startingState'], 'q4')
        self.assertEqual(fsa['acceptingStates'], ['q5'])
        self.assertEqual(fsa['transitions']['q4'], {'': ['q0', 'q2']})
        self.assertEqual(fsa['transitions']['q1'], {'': ['q5']})
        self.assertEqual(fsa['transitions']['q3'], {'': ['q5']})
        self.assertEqual(_flagged(automaton, 'start'), [4])
        self.assertEqual(_flagged(automaton, 'terminal'), [5])

    def test_kleene_closes_loop_on_start(self):
        automaton = postfix_to_nfa('a*')

        self.assertEqual(automaton.start, 0)
        self.assertEqual(automaton.terminal, 0)
        self.assertEqual(automaton.transition_count, 2)
        loop = automaton.transitions_from(1)[0]
        self.assertEqual((loop.destination, loop.symbol), (0, Symbol.EPSILON))
        self.assertTrue(automaton.states[0].terminal)
        self.assertFalse(automaton.states[1].terminal)

    def test_kleene_over_empty_string_is_skipped(self):
        automaton = postfix_to_nfa('1*')
        self.assertEqual(automaton.transition_count, 1)
        self.assertEqual(automaton.start, 0)
        self.assertEqual(automaton.terminal, 1)

        # Still skipped when the empty-string fragment is composite
        self.assertEqual(postfix_to_nfa('11.*').transition_count, 3)
        self.assertEqual(postfix_to_nfa('11+*').transition_count, 6)

    def test_kleene_over_optional_letter_adds_loop(self):
        # (1|a)* accepts more than the empty string
        automaton = postfix_to_nfa('1a+*')
        self.assertEqual(automaton.transition_count, 7)
        self.assertEqual(automaton.start, automaton.terminal)

    def test_nested_kleene(self):
        automaton = postfix_to_nfa('a**')
        # The second star closes a self loop on the start state
        self.assertIn((0, Symbol.EPSILON),
                      [(t.destination, t.symbol) for t in automaton.transitions_from(0)])

    def test_exactly_one_start_and_terminal(self):
        expressions = [
            'a', '1', 'ab.', 'ab+', 'a*', '1*', 'ab.*', 'ab+c.', 'ab+*c.',
            'a1.b+*', 'abc..*', 'ab*+c*.', '11+*', 'a*b*+', 'ab+c+*a.'
        ]
        for expression in expressions:
            with self.subTest(expression=expression):
                automaton = postfix_to_nfa(expression)
                self.assertEqual(_flagged(automaton, 'start'), [automaton.start])
                self.assertEqual(_flagged(automaton, 'terminal'), [automaton.terminal])

    def test_states_are_indexed_in_creation_order(self):
        automaton = postfix_to_nfa('ab+c.*')
        self.assertEqual([state.index for state in automaton.states],
                         list(range(automaton.state_count)))
        for state in automaton.states:
            for transition in state.transitions:
                self.assertEqual(transition.source, state.index)

    def test_malformed_expressions(self):
        for expression in ['', '.', '+', '*', 'a.', 'a+', 'ab', 'abc.', 'ax', 'a b.', 'A']:
            with self.subTest(expression=expression):
                with self.assertRaises(MalformedInputError):
                    postfix_to_nfa(expression)

        with self.assertRaises(MalformedInputError):
            postfix_to_nfa(None)

    def test_malformed_error_is_value_error(self):
        with self.assertRaises(ValueError):
            postfix_to_nfa('.')

    def test_error_messages(self):
        with self.assertRaisesRegex(MalformedInputError, "position 1"):
            postfix_to_nfa('a.')
        with self.assertRaisesRegex(MalformedInputError, "'x'"):
            postfix_to_nfa('ax.')
        with self.assertRaisesRegex(MalformedInputError, "2 unjoined"):
            postfix_to_nfa('ab')

    def test_validate_postfix_syntax(self):
        self.assertEqual(validate_postfix_syntax('ab+*'), {'valid': True})

        result = validate_postfix_syntax('ab')
        self.assertFalse(result['valid'])
        self.assertIn('error', result)

        self.assertFalse(validate_postfix_syntax('')['valid'])


class TestPostfixNFABuilder(unittest.TestCase):

    def test_push_atom(self):
        builder = PostfixNFABuilder()
        builder.push_atom('b')
        self.assertEqual(builder.fragments, [Fragment(0, 1, False)])
        self.assertTrue(builder.states[0].start)
        self.assertTrue(builder.states[1].terminal)

    def test_concat_of_empty_strings_stays_epsilon_only(self):
        builder = PostfixNFABuilder()
        builder.push_atom('1')
        builder.push_atom('1')
        builder.concat(2)
        self.assertEqual(builder.fragments, [Fragment(0, 3, True)])

    def test_union_with_letter_is_not_epsilon_only(self):
        builder = PostfixNFABuilder()
        builder.push_atom('1')
        builder.push_atom('a')
        builder.union(2)
        self.assertEqual(builder.fragments, [Fragment(4, 5, False)])

    def test_kleene_leaves_single_state_fragment(self):
        builder = PostfixNFABuilder()
        builder.push_atom('a')
        builder.kleene(1)
        self.assertEqual(builder.fragments, [Fragment(0, 0, False)])

    def test_to_automaton_requires_single_fragment(self):
        with self.assertRaises(MalformedInputError):
            PostfixNFABuilder().to_automaton()
