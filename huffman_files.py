"""Reading and writing the files around the Huffman text codec.

Text is read and written as bytes through latin-1, so every byte value is a
symbol of its own.
"""

from huffman import huffman_compress
from huffman_table import (serialize_code_table, parse_code_table,
                           rebuild_huffman_tree, trace_decode)


TEXT_ENCODING = 'latin-1'

DEFAULT_ENCODED_FILE = 'encoded.txt'
DEFAULT_TABLE_FILE = 'huffman_table.txt'
DEFAULT_DECODED_FILE = 'Decode.txt'


def read_text(path):
    with open(path, 'rb') as f:
        return f.read().decode(TEXT_ENCODING)


def write_text(path, text):
    with open(path, 'wb') as f:
        f.write(text.encode(TEXT_ENCODING))


def write_code_table(path, table):
    with open(path, 'w', encoding=TEXT_ENCODING, newline='') as f:
        f.write(serialize_code_table(table))


def read_code_table(path):
    with open(path, 'r', encoding=TEXT_ENCODING, newline='') as f:
        return parse_code_table(f.read().split('\n'))


def read_encoded_line(path):
    with open(path, 'r', encoding=TEXT_ENCODING, newline='') as f:
        return f.readline().rstrip('\r\n')


def encode_file(source_path, encoded_path=DEFAULT_ENCODED_FILE,
                table_path=DEFAULT_TABLE_FILE):
    """Encode a text file, writing the bit string and its code table.

    Returns (text, tree, table, bits) so callers can check the result.
    """
    text = read_text(source_path)
    tree, table, bits = huffman_compress(text)
    write_code_table(table_path, table)
    write_text(encoded_path, bits)
    return text, tree, table, bits


def decode_files(table_path, letter_path, output_path=DEFAULT_DECODED_FILE):
    # Nothing is written unless decoding succeeds
    table = read_code_table(table_path)
    bits = read_encoded_line(letter_path)
    text = trace_decode(rebuild_huffman_tree(table), bits)
    write_text(output_path, text)
    return text
