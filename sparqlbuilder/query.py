import logging

import sparqlbuilder

from sparqlbuilder.grammar import ExpressionKind
from sparqlbuilder.expressions import classify
from sparqlbuilder.usage import UsageLedger
from sparqlbuilder.graph import GraphBuilder
from sparqlbuilder.prefixes import QueryPrefixBuilder
from sparqlbuilder.modifiers import QueryModifierBuilder
from sparqlbuilder.formatter import QueryFormatter
from sparqlbuilder.errors import QueryFormAlreadySet, RecursiveSubquery

log = logging.getLogger(__name__)

SELECT = frozenset([ExpressionKind.VARIABLE, ExpressionKind.FUNCTION_AS])

DESCRIBE = SELECT | frozenset([ExpressionKind.IRI, ExpressionKind.PREFIXED_IRI])


class QueryBuilder(object):
    """
    Builds a SELECT or DESCRIBE query

    >>> q = QueryBuilder({'foaf': 'http://xmlns.com/foaf/0.1/'})
    >>> print(q.select('?name').where('?person', 'foaf:name', '?name').limit(5))
    PREFIX foaf: <http://xmlns.com/foaf/0.1/> SELECT ?name WHERE { ?person foaf:name ?name . } LIMIT 5

    Every method but render and format returns the builder itself.
    Variables and prefixes are checked when the query is rendered: all
    used ones must be defined somewhere in the query.
    """

    def __init__(self, prefixes=None):
        self.usage = UsageLedger()
        self.prefixBuilder = QueryPrefixBuilder(self.usage, prefixes)
        self.graph = GraphBuilder(self.usage)
        self.modifierBuilder = QueryModifierBuilder(self.usage)

        self.queryForm = None
        self.uniqueness = None
        self.projection = []

    # ------ PREFIXES --------------

    def prefix(self, name, iri):
        self.prefixBuilder.setPrefix(name, iri)
        return self

    def prefixes(self, prefixes):
        self.prefixBuilder.setPrefixes(prefixes)
        return self

    def getPrefixes(self):
        return self.prefixBuilder.getPrefixes()

    # ------ QUERY FORM --------------

    def _setQueryForm(self, form, uniqueness, expressions, kinds):
        if self.queryForm is not None:
            raise QueryFormAlreadySet(self.queryForm)

        if len(expressions) == 1 and isinstance(expressions[0], (list, tuple)):
            expressions = expressions[0]
        expressions = [classify(e, kinds) for e in expressions]

        for expression in expressions:
            self.usage.useVariables(expression.variables)
            self.usage.usePrefixes(expression.prefixes)
            self.usage.defineVariables(expression.assignments)

        self.queryForm = form
        self.uniqueness = uniqueness
        self.projection = expressions
        return self

    def select(self, *expressions):
        return self._setQueryForm('SELECT', None, expressions, SELECT)

    def selectDistinct(self, *expressions):
        return self._setQueryForm('SELECT', 'DISTINCT', expressions, SELECT)

    def selectReduced(self, *expressions):
        return self._setQueryForm('SELECT', 'REDUCED', expressions, SELECT)

    def describe(self, *expressions):
        return self._setQueryForm('DESCRIBE', None, expressions, DESCRIBE)

    def projectedVariables(self):
        """
        Names of the variables this query hands to an enclosing query

        SELECT * hands out every variable it defines
        """
        if not self.projection:
            return list(self.usage.definedVariables)

        names = []
        for expression in self.projection:
            if expression.kind is ExpressionKind.VARIABLE:
                names.extend(expression.variables)
            names.extend(expression.assignments)
        return names

    # ------ GRAPH PATTERN --------------

    def where(self, subject, predicate, obj):
        self.graph.where(subject, predicate, obj)
        return self

    def also(self, *args):
        self.graph.also(*args)
        return self

    def filter(self, expression):
        self.graph.filter(expression)
        return self

    def filterExists(self, *args):
        self.graph.filterExists(*args)
        return self

    def filterNotExists(self, *args):
        self.graph.filterNotExists(*args)
        return self

    def optional(self, *args):
        self.graph.optional(*args)
        return self

    def union(self, *graphs):
        self.graph.union(*graphs)
        return self

    def subquery(self, query):
        if not isinstance(query, QueryBuilder):
            raise TypeError('subquery() takes a QueryBuilder, not %s'
                            % type(query).__name__)
        if query is self or query.hasSubquery(self):
            raise RecursiveSubquery()

        self.graph.subquery(query)
        return self

    def hasSubquery(self, query):
        for subquery in self.graph.subqueries:
            if subquery is query or subquery.hasSubquery(query):
                return True
        return False

    def newSubquery(self):
        return QueryBuilder(self.getPrefixes())

    def newSubgraph(self):
        return GraphBuilder(self.usage)

    # ------ MODIFIERS --------------

    def groupBy(self, *expressions):
        self.modifierBuilder.groupBy(*expressions)
        return self

    def having(self, expression):
        self.modifierBuilder.having(expression)
        return self

    def orderBy(self, expression, direction='ASC'):
        self.modifierBuilder.orderBy(expression, direction)
        return self

    def limit(self, limit):
        self.modifierBuilder.limit(limit)
        return self

    def offset(self, offset):
        self.modifierBuilder.offset(offset)
        return self

    # ------ OUTPUT --------------

    def _renderForm(self):
        form = self.queryForm or 'SELECT'
        if self.uniqueness:
            form += ' ' + self.uniqueness
        if self.projection:
            return form + ' ' + ' '.join(e.text for e in self.projection)
        return form + ' *'

    def render(self, includePrefixes=True):
        """
        The query as a single line of SPARQL

        Raises UsageError if it uses prefixes or variables it does not
        define
        """
        if sparqlbuilder.VALIDATE_USAGE:
            self.usage.validate()

        parts = []
        if includePrefixes:
            parts.append(self.prefixBuilder.render())
        parts.append(self._renderForm())
        parts.append('WHERE { %s }' % self.graph.render())
        parts.append(self.modifierBuilder.render())

        sparql = ' '.join(p for p in parts if p)
        log.debug('rendered %s', sparql)
        return sparql

    def format(self):
        return QueryFormatter().format(self.render())

    def __str__(self):
        return self.render()
