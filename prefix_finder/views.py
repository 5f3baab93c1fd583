from django.http import JsonResponse
from django.views.decorators.http import require_POST
from django.views.decorators.csrf import csrf_exempt
from loguru import logger
import json
from .postfix_conversions import postfix_to_nfa, validate_postfix_syntax
from .prefix_simulation import find_prefix_path


def _parse_body(request):
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    return data


@csrf_exempt
@require_POST
def build_automaton(request):
    """
    Django view that builds the NFA for a postfix expression.

    Expects a POST request with a JSON body containing:
    - regex: The postfix expression

    Returns the automaton in FSA format together with its size.
    """
    try:
        data = _parse_body(request)
        regex = data.get('regex')

        if regex is None:
            return JsonResponse({'error': 'Missing regex parameter'}, status=400)

        automaton = postfix_to_nfa(regex)

        return JsonResponse({
            'automaton': automaton.to_fsa_dict(),
            'num_states': automaton.state_count,
            'num_transitions': automaton.transition_count
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("build_automaton failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def find_prefix(request):
    """
    Django view answering whether the NFA of a postfix expression can consume
    `number` copies of `letter` from its start state.

    Expects a POST request with a JSON body containing:
    - regex: The postfix expression
    - letter: The letter to repeat
    - number: How many times to consume it (non-negative integer)

    Returns a JSON response with the answer and, when found, the walk.
    """
    try:
        data = _parse_body(request)
        regex = data.get('regex')
        letter = data.get('letter')
        number = data.get('number')

        if regex is None:
            return JsonResponse({'error': 'Missing regex parameter'}, status=400)

        if letter is None:
            return JsonResponse({'error': 'Missing letter parameter'}, status=400)

        if number is None:
            return JsonResponse({'error': 'Missing number parameter'}, status=400)

        try:
            number = int(number)
        except (ValueError, TypeError):
            return JsonResponse({'error': 'number must be a non-negative integer'}, status=400)

        automaton = postfix_to_nfa(regex)
        path = find_prefix_path(automaton, letter, number)

        return JsonResponse({
            'regex': regex,
            'letter': letter,
            'number': number,
            'found': path is not None,
            'answer': 'YES' if path is not None else 'NO',
            'path': path or []
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("find_prefix failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def validate_postfix(request):
    """
    Django view to check a postfix expression without searching it.
    """
    try:
        data = _parse_body(request)
        regex = data.get('regex')

        if regex is None:
            return JsonResponse({'error': 'Missing regex parameter'}, status=400)

        return JsonResponse(validate_postfix_syntax(regex))

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("validate_postfix failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)
