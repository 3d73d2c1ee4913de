class SPARQLBuilderError(Exception):
    def __init__(self, msg=None):
        Exception.__init__(self, msg)


class InvalidExpression(SPARQLBuilderError, ValueError):
    """Raised when a string is none of the expression kinds allowed
    at the place it was given"""

    def __init__(self, candidate, kinds):
        self.candidate = candidate
        self.kinds = list(kinds)
        SPARQLBuilderError.__init__(
            self, '"%s" has to be a %s' % (
                candidate, ' or a '.join(k.value for k in self.kinds)))


class QueryFormAlreadySet(SPARQLBuilderError):
    def __init__(self, form):
        self.form = form
        SPARQLBuilderError.__init__(
            self, 'Query form is already set to %s' % form)


class RecursiveSubquery(SPARQLBuilderError):
    """Raised when a query would end up as its own subquery"""

    def __init__(self):
        SPARQLBuilderError.__init__(
            self, 'A query cannot contain itself as a subquery')


class DuplicatePrefix(SPARQLBuilderError, ValueError):
    def __init__(self, name, iri):
        self.name = name
        self.iri = iri
        SPARQLBuilderError.__init__(
            self, 'The prefix %s is already bound to <%s>' % (name, iri))


class UsageError(SPARQLBuilderError):
    """
    Raised at render time when the query references prefixes or
    variables it never defines. kind is 'prefixes' or 'variables',
    missing lists the names in the order they were first used.
    """

    def __init__(self, kind, missing):
        self.kind = kind
        self.missing = list(missing)
        if kind == 'prefixes':
            msg = "The prefixes %s aren't defined for this query." % \
                ', '.join(self.missing)
        else:
            msg = "The variables ?%s don't occur in this query." % \
                ', ?'.join(self.missing)
        SPARQLBuilderError.__init__(self, msg)


class InvalidModifierArgument(SPARQLBuilderError, ValueError):
    def __init__(self, msg):
        SPARQLBuilderError.__init__(self, msg)


class NoCurrentTriple(SPARQLBuilderError):
    def __init__(self):
        SPARQLBuilderError.__init__(
            self, 'also() needs a triple added with where() first')


class EndpointError(SPARQLBuilderError):
    """Raised when a SPARQL endpoint cannot be reached or answers
    with an HTTP error"""

    def __init__(self, msg, status=None):
        self.status = status
        SPARQLBuilderError.__init__(self, msg)
