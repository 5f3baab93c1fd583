from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from prefix_finder.prefix_simulation import find_prefix


class Command(BaseCommand):
    help = (
        "Read a postfix expression, a letter and a number from a file and print "
        "YES if the expression's NFA can consume that many copies of the letter."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            'input_file', nargs='?', default=None,
            help="File holding the three whitespace-separated tokens "
                 "(defaults to settings.PREFIX_FINDER_INPUT_FILE)"
        )

    def handle(self, *args, **options):
        input_file = options['input_file'] or settings.PREFIX_FINDER_INPUT_FILE

        try:
            with open(input_file) as f:
                tokens = f.read().split()
        except OSError as e:
            raise CommandError(f"Cannot read '{input_file}': {e}")

        if len(tokens) < 3:
            raise CommandError(
                f"'{input_file}' must contain a regex, a letter and a number, found {len(tokens)} token(s)"
            )
        regex, letter, number = tokens[:3]

        try:
            number = int(number)
        except ValueError:
            raise CommandError(f"Number must be an integer, got '{number}'")

        self.stdout.write(regex)
        self.stdout.write(letter)
        self.stdout.write(str(number))

        try:
            found = find_prefix(regex, letter, number)
        except ValueError as e:
            raise CommandError(str(e))

        self.stdout.write('YES' if found else 'NO')
