import logging
import collections

from rdflib.term import Node, BNode
from rdflib.paths import Path

from sparqlbuilder.grammar import ExpressionKind, DEFAULT, matches, \
    findVariables, findPrefixes, findAssignments
from sparqlbuilder.errors import InvalidExpression

log = logging.getLogger(__name__)

Expression = collections.namedtuple(
    'Expression', 'text kind variables prefixes assignments')

# a prefix name is a definition, not a use
NO_CAPTURES = frozenset([ExpressionKind.PREFIX])


def toText(expression):
    """
    Expressions are strings, rdflib terms and paths are accepted
    in their N3 form
    """
    # blank node labels would pass as a prefixed name with prefix _
    if isinstance(expression, BNode):
        return None
    if isinstance(expression, (Node, Path)):
        return expression.n3()
    if isinstance(expression, str):
        return expression
    return None


def classify(expression, kinds=DEFAULT):
    """
    Find the first kind in kinds that the whole expression matches

    Returns an Expression with the variables and prefixes the
    expression refers to, raises InvalidExpression if no kind matches
    """
    kinds = [k for k in ExpressionKind if k in kinds]
    text = toText(expression)

    for kind in kinds:
        if text is not None and matches(kind, text):
            break
    else:
        log.debug('%r matches none of %s', expression,
                  ', '.join(k.name for k in kinds))
        raise InvalidExpression(expression, kinds)

    if kind in NO_CAPTURES:
        return Expression(text, kind, [], [], [])

    return Expression(text, kind,
                      findVariables(text),
                      findPrefixes(text),
                      findAssignments(text))
