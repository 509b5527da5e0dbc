"""Persisted Huffman code tables and decoding without the original tree.

A table is one line per symbol, `<symbol>: <code>`. Newline, carriage return
and backslash symbols are written as two-character backslash escapes so that
every entry stays on its own line.
"""

from bitstring import Bits
from huffman import (Leaf, Internal, DecodeError, TruncatedInputError,
                     TableFormatError, check_bits)


TABLE_DELIMITER = ': '

ESCAPES = {'\\': '\\\\', '\n': '\\n', '\r': '\\r'}
UNESCAPES = {'\\': '\\', 'n': '\n', 'r': '\r'}


def serialize_code_table(table):
    lines = []
    for symbol in sorted(table):
        lines.append(f'{ESCAPES.get(symbol, symbol)}{TABLE_DELIMITER}{table[symbol]}\n')
    return ''.join(lines)


def parse_table_line(line):
    """Return (symbol, code), or None for a line that isn't a table entry."""
    line = line.rstrip('\r\n')
    if not line:
        return None
    if line[0] == '\\' and len(line) > 1 and line[1] in UNESCAPES:
        symbol, rest = UNESCAPES[line[1]], line[2:]
    else:
        symbol, rest = line[0], line[1:]
    if not rest.startswith(TABLE_DELIMITER):
        return None
    code = rest[len(TABLE_DELIMITER):].rstrip(' \t')
    if not code or code.strip('01'):
        return None
    return symbol, code


def parse_code_table(lines):
    table = {}
    for line in lines:
        entry = parse_table_line(line)
        if entry is not None:
            symbol, code = entry
            table[symbol] = code
    return table


def rebuild_huffman_tree(table):
    """Grow a tree by following each symbol's code from the root.

    Internal nodes are created as the paths need them and shared between
    codes with a common prefix. Frequencies are not known and stay zero.
    """
    if not table:
        raise TableFormatError('code table is empty')
    root = Internal()
    for symbol, code in table.items():
        if not code or code.strip('01'):
            raise TableFormatError(f'invalid code {code!r} for {symbol!r}')
        path = Bits(f'0b{code}')
        current = root
        for bit in path[:-1]:
            child = current.child(bit)
            if child is None:
                child = Internal()
                current.set_child(bit, child)
            elif child.is_leaf:
                raise TableFormatError(
                    f'code for {child.symbol!r} is a prefix of the code for {symbol!r}')
            current = child
        if current.child(path[-1]) is not None:
            raise TableFormatError(f'code {code!r} for {symbol!r} collides with another code')
        current.set_child(path[-1], Leaf(symbol))
    return root


def trace_decode(tree, bits):
    """Decode bits one at a time, returning to the root after every leaf."""
    check_bits(bits)
    if tree.is_leaf:
        raise DecodeError('Failed To Decode! tree has no branches')
    if not bits:
        return ''
    out = []
    current = tree
    for pos, bit in enumerate(Bits(bin=bits)):
        current = current.child(bit)
        if current is None:
            raise DecodeError(f'Failed To Decode! no code matches at bit {pos}')
        if current.is_leaf:
            out.append(current.symbol)
            current = tree
    if current is not tree:
        raise TruncatedInputError(
            f'bit string ends inside a code after {len(out)} symbols')
    return ''.join(out)
