from collections import OrderedDict

from sparqlbuilder.grammar import ExpressionKind
from sparqlbuilder.expressions import classify
from sparqlbuilder.errors import DuplicatePrefix

NAME = frozenset([ExpressionKind.PREFIX])

IRI = frozenset([ExpressionKind.IRI])


def _pairs(prefixes):
    """
    (name, iri) pairs from a dict, from anything with namespaces() like
    an rdflib Graph or NamespaceManager, or from an iterable of pairs
    """
    if hasattr(prefixes, 'namespaces'):
        return list(prefixes.namespaces())
    if hasattr(prefixes, 'items'):
        return list(prefixes.items())
    return list(prefixes)


class QueryPrefixBuilder(object):

    def __init__(self, usage, prefixes=None):
        self.usage = usage
        self.prefixes = OrderedDict()
        if prefixes is not None:
            self.setPrefixes(prefixes)

    def setPrefix(self, name, iri):
        # URIRef and Namespace are strings, but a URIRef would classify
        # in its <bracketed> N3 form
        if isinstance(iri, str):
            iri = str(iri)

        name = classify(name, NAME).text
        iri = classify(iri, IRI).text

        if name in self.prefixes and self.prefixes[name] != iri:
            raise DuplicatePrefix(name, self.prefixes[name])

        self.prefixes[name] = iri
        self.usage.definePrefixes([name])
        return self

    def setPrefixes(self, prefixes):
        for name, iri in _pairs(prefixes):
            self.setPrefix(name, iri)
        return self

    def getPrefixes(self):
        return OrderedDict(self.prefixes)

    def render(self):
        return ' '.join('PREFIX %s: <%s>' % (name, iri)
                        for name, iri in self.prefixes.items())
