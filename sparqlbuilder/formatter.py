"""
Pretty printing of flat SPARQL

The formatter knows nothing about SPARQL beyond a handful of tokens,
any string can be formatted, whoever produced it.
"""

import re

from sparqlbuilder.grammar import escapeSequences, restoreSequences

# tokens starting on a new line
NEWLINE_BEFORE = frozenset(['PREFIX', 'FILTER', 'OPTIONAL', 'LIMIT', 'GROUP',
                            'ORDER', 'HAVING', '}'])

# tokens with a single space in front, unless a line starts with them
SPACE_BEFORE = frozenset(['.', '=', '(', '<', '{', '?', '$'])

# tokens followed by a new line
NEWLINE_AFTER = frozenset(['{', '}', '.'])

SPLIT = re.compile(r'(\W)')


class QueryFormatter(object):

    def format(self, sparql):
        """
        Re-indent sparql with one tab per open brace and normalise
        spaces. Text inside quotes and angle brackets is left untouched.
        """
        self.parts = []
        self.indentation = 0

        escaped, replacements = escapeSequences(sparql)

        for part in SPLIT.split(escaped):
            if not part:
                continue
            if self.parts:
                self.before(part)
            self.indent(part)
            self.append(part)
            self.after(part)

        self.trimEnd()
        self.parts.append('\n')

        return restoreSequences(''.join(self.parts), replacements)

    def last(self):
        return self.parts[-1] if self.parts else ''

    def before(self, part):
        if part in NEWLINE_BEFORE:
            self.trimEnd()
            self.parts.append('\n')

        if part == 'SELECT' and self.indentation == 0:
            self.trimEnd()
            self.parts.append('\n\n')

        if part == 'UNION' or (self.last() != '\n' and part in SPACE_BEFORE):
            self.trimEnd()
            self.append(' ')

    def indent(self, part):
        if part == '}':
            self.indentation -= 1

        if not part.isspace() and self.last().startswith('\n'):
            self.parts.append('\t' * self.indentation)

        if part == '{':
            self.indentation += 1

    def append(self, part):
        if not part.isspace():
            self.parts.append(part)
        elif not self.last().isspace() and self.last() != '(':
            self.parts.append(' ')

    def after(self, part):
        if part in NEWLINE_AFTER:
            self.parts.append('\n')
        elif part == ';':
            self.parts.append('\n\t')

    def trimEnd(self):
        while self.parts and self.parts[-1].isspace():
            self.parts.pop()
