"""
The expression grammar

Every string handed to the builder is checked against one of the
elements below. The elements only recognise the shape of a single
expression, they do not build a syntax tree.
"""

import re
import hashlib

from collections import OrderedDict
from enum import Enum

from pyparsing import Literal, Regex, Optional, ZeroOrMore, Forward, \
    Combine, Suppress, CaselessKeyword, ParseException, one_of, rest_of_line


class ExpressionKind(Enum):
    # definition order is the order kinds are tried in
    VARIABLE = 'variable'
    IRI = 'IRI'
    PREFIX = 'prefix'
    PREFIXED_IRI = 'prefixed IRI'
    NATIVE = 'native'
    PATH = 'path'
    FUNCTION = 'function'
    FUNCTION_AS = 'function with variable assignment'


ALL = frozenset(ExpressionKind)

DEFAULT = frozenset([ExpressionKind.IRI,
                     ExpressionKind.PREFIXED_IRI,
                     ExpressionKind.VARIABLE])


# ------ TERMINALS --------------

# name ::= [a-zA-Z0-9_]+
VARNAME = Regex(r'\w+')

# variable ::= ( '?' | '$' ) name
Var = Combine(Suppress(Literal('?') | Literal('$')) + VARNAME)

# iri ::= [^<>"{}|^`\ and whitespace]+
IRI = Regex(r'[^\s<>"{}|\\^`]+')

# prefix ::= name
PREFIX = Regex(r'\w+')

NAME = Regex(r'\w+')

# pname ::= prefix ':' name
PNAME = Combine(PREFIX + ':' + NAME)

# iriref ::= '<' iri '>'
IRIREF = Combine('<' + IRI + '>')

# prefixed_iri ::= pname | iriref
PrefixedIri = PNAME | IRIREF

INTEGER = Regex(r'[0-9]+')

STRING = Regex(r'"(?:[^"\\]|\\.)*"')

LANGTAG = Regex(r'@[a-zA-Z]+(?:-[a-zA-Z0-9]+)*')

# native ::= integer | string ( langtag | '^^' prefixed_iri )?
NativeLiteral = INTEGER | Combine(STRING + Optional(LANGTAG | '^^' + PrefixedIri))


# ------ PROPERTY PATHS --------------

Path = Forward()

# path_primary ::= prefixed_iri | 'a' | '(' path ')'
PathPrimary = PrefixedIri | CaselessKeyword('a') | '(' + Path + ')'

# path_element ::= '!'? '^'? path_primary ( '?' | '*' | '+' )?
PathElement = Optional('!') + Optional('^') + PathPrimary + \
    Optional(one_of('? * +'))

# path ::= path_element ( ( '/' | '|' ) path_element )*
Path <<= PathElement + ZeroOrMore(one_of('/ |') + PathElement)


# ------ FUNCTIONS --------------

FUNCTIONS = [
    # aggregates
    'COUNT', 'SUM', 'MIN', 'MAX', 'AVG', 'SAMPLE', 'GROUP_CONCAT',
    # terms
    'STR', 'LANG', 'LANGMATCHES', 'DATATYPE', 'BOUND', 'IRI', 'URI',
    'BNODE', 'RAND',
    # numerics
    'ABS', 'CEIL', 'FLOOR', 'ROUND',
    # strings
    'CONCAT', 'STRLEN', 'UCASE', 'LCASE', 'ENCODE_FOR_URI', 'CONTAINS',
    'STRSTARTS', 'STRENDS', 'STRBEFORE', 'STRAFTER',
    # dates
    'YEAR', 'MONTH', 'DAY', 'HOURS', 'MINUTES', 'SECONDS', 'TIMEZONE', 'TZ',
    'NOW',
    # hashes and ids
    'UUID', 'STRUUID', 'MD5', 'SHA1', 'SHA256', 'SHA384', 'SHA512',
    # conditionals
    'COALESCE', 'IF', 'STRLANG', 'STRDT', 'sameTerm',
    'isIRI', 'isURI', 'isBLANK', 'isLITERAL', 'isNUMERIC',
    'REGEX', 'SUBSTR', 'REPLACE',
    'EXISTS', 'NOT EXISTS',
]

FunctionName = one_of(FUNCTIONS, caseless=True)

# function_head ::= FUNCTIONS | iriref | prefix ':' | variable | '!'
FunctionHead = FunctionName | IRIREF | Combine(PREFIX + ':') | Var | Literal('!')

# function ::= function_head .*
# anything may follow the head, balanced brackets are checked separately
FunctionCall = FunctionHead + rest_of_line

# function_as ::= '(' function_head .* ' AS ' variable ')'
FunctionAssignment = Suppress('(') + FunctionHead + \
    Regex(r'.* AS [?$]\w+\)', flags=re.I).leave_whitespace()


GRAMMAR = {
    ExpressionKind.VARIABLE: Var,
    ExpressionKind.IRI: IRI,
    ExpressionKind.PREFIX: PREFIX,
    ExpressionKind.PREFIXED_IRI: PrefixedIri,
    ExpressionKind.NATIVE: NativeLiteral,
    ExpressionKind.PATH: Path,
    ExpressionKind.FUNCTION: FunctionCall,
    ExpressionKind.FUNCTION_AS: FunctionAssignment,
}

# kinds that are a single token and never contain whitespace
TOKEN_KINDS = frozenset([ExpressionKind.VARIABLE,
                         ExpressionKind.IRI,
                         ExpressionKind.PREFIX,
                         ExpressionKind.PREFIXED_IRI,
                         ExpressionKind.PATH])

WHITESPACE = re.compile(r'\s')


# ------ CAPTURES --------------

# quoted strings and bracketed iris, hidden before captures and formatting
SEQUENCE = Regex(r'"[^"]*"|<[^>]*>')

# a variable that is not the target of an AS
VariableReference = Regex(
    r'(?:^|(?<=\W))(?<!\bAS )[?$](?P<name>\w+)', flags=re.I)

AssignmentTarget = Regex(r'\bAS [?$](?P<name>\w+)', flags=re.I)

PrefixReference = Regex(r'(?:^|(?<=\W))(?P<name>\w+):\w+')

QuotedString = Suppress(STRING)


def escapeSequences(text):
    """
    Replace every "..." and <...> span in text by an opaque <md5> token

    Returns the escaped text and a dict mapping each token back to the
    span it replaced
    """
    replacements = {}

    def escape(tokens):
        key = '<%s>' % hashlib.md5(tokens[0].encode('utf-8')).hexdigest()
        replacements[key] = tokens[0]
        return key

    escaped = SEQUENCE.copy().set_parse_action(escape).transform_string(text)
    return escaped, replacements


def restoreSequences(text, replacements):
    for key, value in replacements.items():
        text = text.replace(key, value)
    return text


def _names(element, text):
    escaped, _ = escapeSequences(text)
    names = OrderedDict()
    for tokens, start, end in element.scan_string(escaped):
        names[tokens['name']] = True
    return list(names)


def findVariables(text):
    """
    Names of the variables used in text, without their sigil

    Variables directly following AS are assignments, see findAssignments
    """
    return _names(VariableReference, text)


def findAssignments(text):
    return _names(AssignmentTarget, text)


def findPrefixes(text):
    return _names(PrefixReference, text)


def isBalanced(text):
    """
    True if text holds as many ( as ), not counting those in strings
    """
    stripped = QuotedString.transform_string(text)
    return stripped.count('(') == stripped.count(')')


def matches(kind, candidate):
    """
    True if the whole of candidate is an expression of the given kind
    """
    if candidate != candidate.strip():
        return False
    if kind in TOKEN_KINDS and WHITESPACE.search(candidate):
        return False

    try:
        GRAMMAR[kind].parse_string(candidate, parse_all=True)
    except ParseException:
        return False

    if kind in (ExpressionKind.FUNCTION, ExpressionKind.FUNCTION_AS):
        return isBalanced(candidate)
    return True
