"""Huffman coding of text into strings of '0' and '1'."""

from collections import Counter
from functools import total_ordering
from heapq import heapify, heappop, heappush
from bitstring import Bits, BitArray


class HuffmanError(Exception):
    pass


class EmptyInputError(HuffmanError, ValueError):
    pass


class UnknownSymbolError(HuffmanError, KeyError):
    pass


class DecodeError(HuffmanError, ValueError):
    pass


class TruncatedInputError(DecodeError):
    pass


class TableFormatError(HuffmanError, ValueError):
    pass


@total_ordering
class Node:
    is_leaf = False

    def __init__(self, freq=0, order=0):
        self.freq = freq
        self.order = order
    def __lt__(self, other):
        # Equal frequencies fall back to creation order
        return (self.freq, self.order) < (other.freq, other.order)


class Leaf(Node):
    is_leaf = True

    def __init__(self, symbol, freq=0, order=0):
        super().__init__(freq, order)
        self.symbol = symbol
    def __repr__(self):
        return f'Leaf({self.symbol!r}, {self.freq})'


class Internal(Node):
    def __init__(self, freq=0, left=None, right=None, order=0):
        super().__init__(freq, order)
        self.left = left
        self.right = right
    def child(self, bit):
        return self.right if bit else self.left
    def set_child(self, bit, node):
        if bit:
            self.right = node
        else:
            self.left = node
    def __repr__(self):
        return f'Internal({self.freq}, {self.left!r}, {self.right!r})'


def count_symbols(seq):
    return Counter(seq)


def make_huffman_tree(frequencies):
    """Merge the two rarest nodes until one remains.

    Leaves are seeded in symbol order and every node remembers when it was
    created, so ties always resolve the same way. A single symbol yields a
    lone Leaf as the root.
    """
    if not frequencies:
        raise EmptyInputError('cannot build a Huffman tree without symbols')
    pq = [Leaf(s, freq=f, order=i)
          for i, (s, f) in enumerate(sorted(frequencies.items()))]
    heapify(pq)
    order = len(pq)
    while len(pq) > 1:
        s1 = heappop(pq)
        s2 = heappop(pq)
        new = Internal(freq=(s1.freq + s2.freq), left=s1, right=s2, order=order)
        order += 1
        heappush(pq, new)
    return pq[0]


def make_code_table(tree):
    # A lone leaf still needs one bit per symbol or the count is lost
    if tree.is_leaf:
        return {tree.symbol: '0'}

    def encode_node(node, code):
        if node.is_leaf:
            return {node.symbol: code}
        else:
            merged = {}
            merged.update(encode_node(node.left, code + '0'))
            merged.update(encode_node(node.right, code + '1'))
            return merged
    return encode_node(tree, '')


def check_bits(bits):
    stray = bits.strip('01')
    if stray:
        raise DecodeError(f'bit string contains {stray[0]!r}')


def huffman_encode(text, table):
    codes = {s: Bits(f'0b{c}') for s, c in table.items()}
    out = BitArray()
    for s in text:
        try:
            out.append(codes[s])
        except KeyError:
            raise UnknownSymbolError(s) from None
    return out.bin


def huffman_decode(tree, bits):
    """Decode by walking the tree from its root once per symbol."""
    check_bits(bits)
    if not bits:
        return ''
    out = []
    if tree.is_leaf:
        for bit in Bits(bin=bits):
            if bit:
                raise DecodeError('Failed To Decode!')
            out.append(tree.symbol)
        return ''.join(out)

    current = tree
    for bit in Bits(bin=bits):
        current = current.child(bit)
        if current is None:
            raise DecodeError('Failed To Decode!')
        if current.is_leaf:
            out.append(current.symbol)
            current = tree
    if current is not tree:
        raise TruncatedInputError(
            f'bit string ends inside a code after {len(out)} symbols')
    return ''.join(out)


def huffman_compress(text):
    """Build the tree and code table for text and encode it.

    Returns (tree, table, bits).
    """
    tree = make_huffman_tree(count_symbols(text))
    table = make_code_table(tree)
    return tree, table, huffman_encode(text, table)


if __name__ == '__main__':
    with open('test.dat', 'rb') as f:
        input_text = f.read().decode('latin-1')

    print('Encoding...')
    tree, table, enc = huffman_compress(input_text)

    print('Decoding...')
    dec = huffman_decode(tree, enc)

    assert input_text == dec
    print(f'Original size: {len(input_text)}')
    print(f'Encoded bits: {len(enc)}')
    print(f'Compression ratio: {len(enc) / 8 / len(input_text)}')
