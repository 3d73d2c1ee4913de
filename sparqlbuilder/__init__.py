__version__ = "0.1.0"

"""
If False, render() does not check that every variable and prefix used
in a query is also defined
"""
VALIDATE_USAGE=True

"""
User-Agent header sent by QueryExecuter unless another one is given
"""
USER_AGENT='sparqlbuilder/%s' % __version__

"""
Seconds QueryExecuter waits for an endpoint before giving up
"""
DEFAULT_TIMEOUT=30


from sparqlbuilder.errors import SPARQLBuilderError, InvalidExpression, \
    QueryFormAlreadySet, RecursiveSubquery, DuplicatePrefix, UsageError, \
    InvalidModifierArgument, NoCurrentTriple, EndpointError
from sparqlbuilder.grammar import ExpressionKind
from sparqlbuilder.graph import GraphBuilder
from sparqlbuilder.query import QueryBuilder
from sparqlbuilder.formatter import QueryFormatter
from sparqlbuilder.executor import QueryExecuter
