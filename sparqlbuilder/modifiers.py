from sparqlbuilder.grammar import ExpressionKind
from sparqlbuilder.expressions import classify
from sparqlbuilder.errors import InvalidModifierArgument

GROUP = frozenset([ExpressionKind.VARIABLE, ExpressionKind.FUNCTION_AS])

HAVING = frozenset([ExpressionKind.FUNCTION])

ORDER = frozenset([ExpressionKind.VARIABLE, ExpressionKind.FUNCTION])

DIRECTIONS = ('ASC', 'DESC')

# modifiers always render in this order
MODIFIERS = ('GROUP BY', 'HAVING', 'ORDER BY', 'LIMIT', 'OFFSET')


def _count(name, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidModifierArgument(
            '%s has to be a non-negative integer, not %r' % (name, value))
    return str(value)


class QueryModifierBuilder(object):
    """
    The solution modifiers of a query

    Each modifier is set at most once, setting it again replaces it
    """

    def __init__(self, usage):
        self.usage = usage
        self.modifiers = {}

    def _track(self, expression):
        self.usage.useVariables(expression.variables)
        self.usage.usePrefixes(expression.prefixes)
        self.usage.defineVariables(expression.assignments)

    def groupBy(self, *expressions):
        if len(expressions) == 1 and isinstance(expressions[0], (list, tuple)):
            expressions = expressions[0]
        if not expressions:
            raise InvalidModifierArgument('GROUP BY needs an expression')

        expressions = [classify(e, GROUP) for e in expressions]
        for expression in expressions:
            self._track(expression)
        self.modifiers['GROUP BY'] = ' '.join(e.text for e in expressions)
        return self

    def having(self, expression):
        expression = classify(expression, HAVING)
        self._track(expression)
        self.modifiers['HAVING'] = '(%s)' % expression.text
        return self

    def orderBy(self, expression, direction='ASC'):
        direction = str(direction).upper()
        if direction not in DIRECTIONS:
            raise InvalidModifierArgument(
                'The direction has to be ASC or DESC, not %s' % direction)

        expression = classify(expression, ORDER)
        self._track(expression)
        self.modifiers['ORDER BY'] = '%s (%s)' % (direction, expression.text)
        return self

    def limit(self, limit):
        self.modifiers['LIMIT'] = _count('LIMIT', limit)
        return self

    def offset(self, offset):
        self.modifiers['OFFSET'] = _count('OFFSET', offset)
        return self

    def render(self):
        return ' '.join('%s %s' % (name, self.modifiers[name])
                        for name in MODIFIERS if name in self.modifiers)
