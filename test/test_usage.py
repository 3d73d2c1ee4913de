import pytest

from sparqlbuilder.usage import UsageLedger
from sparqlbuilder.errors import UsageError


def test_nothing_used():
    UsageLedger().validate()


def test_defined_after_use():
    usage = UsageLedger()
    usage.useVariables(['x'])
    usage.usePrefixes(['foo'])
    usage.defineVariables(['x'])
    usage.definePrefixes(['foo'])
    usage.validate()


def test_extracts_from_expressions():
    usage = UsageLedger()
    usage.useVariables('?x + $y > foo:z')
    usage.usePrefixes('?x + $y > foo:z')
    assert list(usage.usedVariables) == ['x', 'y']
    assert list(usage.usedPrefixes) == ['foo']

    usage.defineVariables('(COUNT (?a) AS ?b)')
    assert list(usage.definedVariables) == ['a', 'b']


def test_missing_variables():
    usage = UsageLedger()
    usage.useVariables(['a', 'b', 'c', 'b'])
    usage.defineVariables(['b'])

    with pytest.raises(UsageError) as excinfo:
        usage.validate()
    assert excinfo.value.kind == 'variables'
    assert excinfo.value.missing == ['a', 'c']
    assert str(excinfo.value) == "The variables ?a, ?c don't occur in this query."


def test_missing_prefixes_reported_first():
    usage = UsageLedger()
    usage.useVariables(['a'])
    usage.usePrefixes(['nyan', 'cat'])

    with pytest.raises(UsageError) as excinfo:
        usage.validate()
    assert excinfo.value.missing == ['nyan', 'cat']
    assert str(excinfo.value) == "The prefixes nyan, cat aren't defined for this query."
