import logging

from collections import OrderedDict

from sparqlbuilder.grammar import findVariables, findPrefixes, findAssignments
from sparqlbuilder.errors import UsageError

log = logging.getLogger(__name__)


def _extract(names, find):
    if isinstance(names, str):
        return find(names)
    return list(names)


class UsageLedger(object):
    """
    Collects the variables and prefixes a query defines and the ones it
    uses. Nothing is checked until validate() is called, uses may come
    before their definitions.

    Each method takes either a list of bare names or an expression
    string the names are extracted from.
    """

    def __init__(self):
        self.definedVariables = OrderedDict()
        self.usedVariables = OrderedDict()
        self.definedPrefixes = OrderedDict()
        self.usedPrefixes = OrderedDict()

    def defineVariables(self, names):
        if isinstance(names, str):
            found = findVariables(names) + findAssignments(names)
        else:
            found = list(names)
        for name in found:
            self.definedVariables[name] = True

    def useVariables(self, names):
        for name in _extract(names, findVariables):
            self.usedVariables[name] = True

    def definePrefixes(self, names):
        for name in _extract(names, findPrefixes):
            self.definedPrefixes[name] = True

    def usePrefixes(self, names):
        for name in _extract(names, findPrefixes):
            self.usedPrefixes[name] = True

    def missingPrefixes(self):
        return [p for p in self.usedPrefixes if p not in self.definedPrefixes]

    def missingVariables(self):
        return [v for v in self.usedVariables
                if v not in self.definedVariables]

    def validate(self):
        """
        Raise UsageError if anything used is not defined, prefixes are
        checked first
        """
        missing = self.missingPrefixes()
        if missing:
            log.debug('undefined prefixes: %s', missing)
            raise UsageError('prefixes', missing)

        missing = self.missingVariables()
        if missing:
            log.debug('undefined variables: %s', missing)
            raise UsageError('variables', missing)
