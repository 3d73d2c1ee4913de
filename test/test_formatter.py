import pytest

from sparqlbuilder.formatter import QueryFormatter
from sparqlbuilder.query import QueryBuilder


def _format(sparql):
    return QueryFormatter().format(sparql)


@pytest.mark.parametrize('sparql, expected', [
    ('', '\n'),
    ('PREFIX abc PREFIX', 'PREFIX abc\nPREFIX\n'),
    ('foobar SELECT xyz', 'foobar\n\nSELECT xyz\n'),
    ('abc { } def', 'abc {\n}\ndef\n'),
    ('{ { foobar . } nyan . }', '{\n\t{\n\t\tfoobar .\n\t}\n\tnyan .\n}\n'),
    ('a.b=c(d<e{f?g$h', 'a .\nb =c (d <e {\n\tf ?g $h\n'),
    ('?a    ?b\n\n ?c', '?a ?b ?c\n'),
])
def test_format(sparql, expected):
    assert _format(sparql) == expected


def test_quoted_spans_untouched():
    sparql = '"abc { def } hij" <abc { xyy > <"a{2>'
    assert _format(sparql) == sparql + '\n'


def test_semicolon():
    assert _format('{ ?a ?b ?c ; test:d ?e . }') == \
        '{\n\t?a ?b ?c ;\n\t\ttest:d ?e .\n}\n'
    # a variable predicate stays on the line of the semicolon
    assert _format('{ ?a ?b ?c ; ?d ?e . }') == \
        '{\n\t?a ?b ?c ; ?d ?e .\n}\n'


@pytest.mark.parametrize('sparql', [
    '{ { foobar . } nyan . }',
    'abc { } def',
    'SELECT ?a WHERE { ?a ?b "x { y" . FILTER (?a > 2) } LIMIT 3',
])
def test_idempotent(sparql):
    once = _format(sparql)
    assert _format(once) == once


def test_formatter_is_reusable():
    formatter = QueryFormatter()
    assert formatter.format('{ a }') == formatter.format('{ a }')


def test_query_format():
    query = QueryBuilder().select('?a').where('?a', '?b', '?c')
    assert query.format() == _format(query.render())
