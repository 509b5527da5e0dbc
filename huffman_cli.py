"""Encode a text file, then decode a saved table and bit string."""

import argparse
import sys

from huffman import HuffmanError, huffman_decode
from huffman_files import (encode_file, decode_files, DEFAULT_ENCODED_FILE,
                           DEFAULT_TABLE_FILE, DEFAULT_DECODED_FILE)


def ask(value, prompt):
    return value if value else input(prompt).strip()


def make_parser():
    parser = argparse.ArgumentParser(
        prog='huffman-codec',
        description='Huffman-code a text file and decode it from a saved table.')
    parser.add_argument('source', nargs='?', help='text file to encode')
    parser.add_argument('--table', help='Huffman table file to decode with')
    parser.add_argument('--letter', help='file whose first line is the bit string to decode')
    parser.add_argument('--encoded-out', default=DEFAULT_ENCODED_FILE,
                        help=f'where to write the bit string (default: {DEFAULT_ENCODED_FILE})')
    parser.add_argument('--table-out', default=DEFAULT_TABLE_FILE,
                        help=f'where to write the code table (default: {DEFAULT_TABLE_FILE})')
    parser.add_argument('--decoded-out', default=DEFAULT_DECODED_FILE,
                        help=f'where to write the decoded text (default: {DEFAULT_DECODED_FILE})')
    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)

    source = ask(args.source, 'Enter the path of the text file: ')
    print('Encoding...')
    try:
        text, tree, table, enc = encode_file(source, args.encoded_out, args.table_out)
    except OSError as e:
        print(f'Error opening file: {e.filename or source}', file=sys.stderr)
        return 1
    except HuffmanError as e:
        print(f'Failed to encode {source}: {e}', file=sys.stderr)
        return 1

    print(f'Original size: {len(text)}')
    print(f'Encoded bits: {len(enc)} ({(len(enc) + 7) // 8} bytes packed)')
    print(f'Compression ratio: {len(enc) / 8 / len(text)}')

    print('Decoding...')
    print(f'Decoded Text: {huffman_decode(tree, enc)}')

    table_path = ask(args.table, 'Enter the path of the Huffman table file: ')
    letter_path = ask(args.letter, 'Enter the path of the encoded letter file: ')
    try:
        decode_files(table_path, letter_path, args.decoded_out)
    except OSError as e:
        print(f'Error opening file: {e.filename or letter_path}', file=sys.stderr)
        return 1
    except HuffmanError as e:
        print(f'Error decoding {letter_path}: {e}', file=sys.stderr)
        return 1
    print(f'Decoded text written to {args.decoded_out}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
