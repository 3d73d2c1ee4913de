import logging

from collections import OrderedDict

from sparqlbuilder.grammar import ExpressionKind
from sparqlbuilder.expressions import classify
from sparqlbuilder.errors import NoCurrentTriple

log = logging.getLogger(__name__)

SUBJECT = frozenset([ExpressionKind.VARIABLE, ExpressionKind.PREFIXED_IRI])

PREDICATE = frozenset([ExpressionKind.VARIABLE, ExpressionKind.PATH])

OBJECT = frozenset([ExpressionKind.VARIABLE,
                    ExpressionKind.PREFIXED_IRI,
                    ExpressionKind.NATIVE])

FILTER = frozenset([ExpressionKind.FUNCTION])


class GraphBuilder(object):
    """
    One graph pattern, the part between { and }

    Triples are grouped by subject and predicate so they render with
    the ; and , shorthands. Every variable and prefix seen is reported
    to the usage ledger, which is shared with the query this graph
    belongs to.
    """

    def __init__(self, usage):
        self.usage = usage

        # subject -> predicate -> [object]
        self.triples = OrderedDict()
        self.subqueries = []
        self.optionals = []
        self.filters = []
        self.unions = []

        self.currentSubject = None
        self.currentPredicate = None

    def _use(self, expression):
        self.usage.useVariables(expression.variables)
        self.usage.usePrefixes(expression.prefixes)

    def where(self, subject, predicate, obj):
        terms = [classify(subject, SUBJECT),
                 classify(predicate, PREDICATE),
                 classify(obj, OBJECT)]

        for term in terms:
            self._use(term)
            if term.kind is ExpressionKind.VARIABLE:
                self.usage.defineVariables(term.variables)

        subject, predicate, obj = [t.text for t in terms]
        self.triples.setdefault(subject, OrderedDict()) \
            .setdefault(predicate, []).append(obj)

        self.currentSubject = subject
        self.currentPredicate = predicate
        return self

    def also(self, *args):
        """
        Continue the last triple:

        also(obj) reuses its subject and predicate,
        also(predicate, obj) reuses its subject,
        also(subject, predicate, obj) is the same as where
        """
        if len(args) == 3:
            return self.where(*args)
        if len(args) not in (1, 2):
            raise TypeError('also() takes 1 to 3 arguments (%d given)'
                            % len(args))
        if self.currentSubject is None:
            raise NoCurrentTriple()

        if len(args) == 1:
            return self.where(self.currentSubject, self.currentPredicate,
                              args[0])
        return self.where(self.currentSubject, args[0], args[1])

    def filter(self, expression):
        expression = classify(expression, FILTER)
        self._use(expression)
        self.filters.append('FILTER (%s)' % expression.text)
        return self

    def _graph(self, args):
        # either an existing graph or the terms of a single triple
        if len(args) == 1 and isinstance(args[0], GraphBuilder):
            return args[0]
        return GraphBuilder(self.usage).where(*args)

    def filterExists(self, *args):
        self.filters.append(
            'FILTER EXISTS { %s }' % self._graph(args).render())
        return self

    def filterNotExists(self, *args):
        self.filters.append(
            'FILTER NOT EXISTS { %s }' % self._graph(args).render())
        return self

    def optional(self, *args):
        self.optionals.append('OPTIONAL { %s }' % self._graph(args).render())
        return self

    def union(self, *graphs):
        if not graphs:
            raise ValueError('union() needs at least one graph pattern')
        for graph in graphs:
            if not isinstance(graph, GraphBuilder):
                raise TypeError('union() takes GraphBuilder instances, not %s'
                                % type(graph).__name__)

        self.unions.append(
            ' UNION '.join('{ %s }' % g.render() for g in graphs))
        return self

    def subquery(self, query):
        """
        Embed query, the variables it projects become defined here
        """
        self.usage.defineVariables(query.projectedVariables())
        self.subqueries.append(query)
        log.debug('attached subquery %r', query)
        return self

    def _renderTriples(self):
        for subject, predicates in self.triples.items():
            yield '%s %s .' % (subject, ' ; '.join(
                '%s %s' % (predicate, ' , '.join(objects))
                for predicate, objects in predicates.items()))

    def render(self):
        """
        The pattern as flat SPARQL, without the surrounding braces
        """
        parts = ['{ %s }' % q.render(False) for q in self.subqueries]
        parts.extend(self._renderTriples())
        return ' '.join(parts + self.optionals + self.filters + self.unions)

    def __str__(self):
        return self.render()
