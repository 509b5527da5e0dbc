import pytest

from huffman import (huffman_compress, Leaf, Internal, DecodeError,
                     TruncatedInputError, TableFormatError)
from huffman_table import (serialize_code_table, parse_code_table,
                           parse_table_line, rebuild_huffman_tree, trace_decode)


SMALL_TABLE = {'b': '0', 'a': '10', 'c': '11'}


def persist_roundtrip(text):
    _, table, enc = huffman_compress(text)
    lines = serialize_code_table(table).split('\n')
    tree = rebuild_huffman_tree(parse_code_table(lines))
    return trace_decode(tree, enc)


def test_serialize_small_table():
    assert serialize_code_table(SMALL_TABLE) == 'a: 10\nb: 0\nc: 11\n'


def test_serialize_is_stable():
    _, table, _ = huffman_compress('mississippi river')
    assert serialize_code_table(table) == serialize_code_table(table)


def test_serialize_escapes_line_breaking_symbols():
    text = serialize_code_table({'\n': '00', '\r': '01', '\\': '10', ':': '11'})
    assert text.split('\n') == ['\\n: 00', '\\r: 01', ':: 11', '\\\\: 10', '']


def test_parse_reads_back_serialized_table():
    table = {'\n': '00', '\r': '010', '\\': '011', ':': '10', ' ': '110', 'x': '111'}
    assert parse_code_table(serialize_code_table(table).split('\n')) == table


def test_parse_line():
    assert parse_table_line('a: 10\n') == ('a', '10')
    assert parse_table_line(':: 01') == (':', '01')
    assert parse_table_line('\\n: 1') == ('\n', '1')
    assert parse_table_line('\\: 01') == ('\\', '01')


@pytest.mark.parametrize('line', ['', 'no delimiter', 'x:01', 'y: ', 'z: 012', '\n'])
def test_parse_skips_malformed_lines(line):
    assert parse_table_line(line) is None
    assert parse_code_table([line, 'a: 1']) == {'a': '1'}


def test_parse_last_duplicate_wins():
    assert parse_code_table(['a: 0', 'b: 10', 'a: 11']) == {'a': '11', 'b': '10'}


def test_rebuild_small_table():
    tree = rebuild_huffman_tree(SMALL_TABLE)
    assert isinstance(tree, Internal)
    assert isinstance(tree.left, Leaf) and tree.left.symbol == 'b'
    assert tree.right.left.symbol == 'a'
    assert tree.right.right.symbol == 'c'
    assert trace_decode(tree, '10100001111') == 'aabbbcc'


def test_rebuild_ignores_insertion_order():
    forward = rebuild_huffman_tree(SMALL_TABLE)
    backward = rebuild_huffman_tree(dict(reversed(SMALL_TABLE.items())))
    assert trace_decode(forward, '1101011') == trace_decode(backward, '1101011') == 'cbac'


@pytest.mark.parametrize('table', [
    {},
    {'a': ''},
    {'a': '0x'},
    {'a': '0', 'b': '01'},
    {'b': '01', 'a': '0'},
    {'a': '1', 'b': '1'},
])
def test_rebuild_rejects_bad_tables(table):
    with pytest.raises(TableFormatError):
        rebuild_huffman_tree(table)


@pytest.mark.parametrize('text', [
    'aabbbcc',
    'A MAN A PLAN A CANAL PANAMA',
    'line one\nline two\r\nback\\slash: colon\n',
    ''.join(chr(i) for i in range(256)) * 2,
])
def test_persisted_table_roundtrip(text):
    assert persist_roundtrip(text) == text


def test_persisted_single_symbol_text():
    assert persist_roundtrip('aaaa') == 'aaaa'


def test_trace_decode_empty_bits():
    assert trace_decode(rebuild_huffman_tree(SMALL_TABLE), '') == ''


def test_trace_decode_truncated_bits():
    tree = rebuild_huffman_tree(SMALL_TABLE)
    with pytest.raises(TruncatedInputError):
        trace_decode(tree, '1010000111')


def test_trace_decode_missing_branch():
    tree = rebuild_huffman_tree({'a': '00', 'b': '01'})
    with pytest.raises(DecodeError, match='Failed To Decode!') as excinfo:
        trace_decode(tree, '001')
    assert not isinstance(excinfo.value, TruncatedInputError)


def test_trace_decode_rejects_leaf_root():
    with pytest.raises(DecodeError):
        trace_decode(Leaf('a'), '000')


def test_trace_decode_rejects_non_binary():
    with pytest.raises(DecodeError):
        trace_decode(rebuild_huffman_tree(SMALL_TABLE), '10 2')


def test_parse_ignores_trailing_spaces_after_code():
    assert parse_table_line('a: 01 \n') == ('a', '01')
    assert parse_code_table(['a: 0\t', 'b: 1  ']) == {'a': '0', 'b': '1'}


def test_trace_decode_long_text():
    text = ('the rain in spain stays mainly in the plain\n' * 2000)
    _, table, enc = huffman_compress(text)
    assert trace_decode(rebuild_huffman_tree(table), enc) == text
