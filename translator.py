import io
import os.path
from code_tree import MalformedCodeError, UnmappedCodeError, UnmappedTextError
from cell_input_stream import CellInputStream
from mapping_reader import read_mapping

DEFAULT_PLACEHOLDER = '?'


class Translator:
    def __init__(self, tree, strict=True, placeholder=DEFAULT_PLACEHOLDER):
        """
        :param tree: CodeTree with the alphabet
        :param strict: raise on cells or characters missing from the alphabet instead of
                       replacing them with the placeholder (decoding) or dropping them (encoding)
        """
        self.tree = tree
        self.strict = strict
        self.placeholder = placeholder

    @property
    def width(self):
        return self.tree.width

    def cells(self, bits):
        """
        Splits braille text into codes line by line, so a cell never runs across a line break.
        """
        if self.width is None:
            if bits.strip('\r\n'):
                raise MalformedCodeError('Tree has no codes, cell width is unknown')
            return
        for line in bits.splitlines():
            yield from CellInputStream(io.StringIO(line), self.width)

    def decode_line(self, bits):
        return ''.join(self.__decode_cells(self.cells(bits.rstrip('\r\n'))))

    def decode(self, input_stream):
        output = io.StringIO()
        for line in input_stream:
            line = line.rstrip('\r\n')
            output.write(self.decode_line(line) + '\n')
        output.seek(0)
        return output

    def encode(self, text):
        """
        Encodes text symbol by symbol, taking the longest text of the alphabet at each position,
        so entries like 'ch' win over 'c'.
        """
        texts = {node_text for _, node_text in self.tree.items()}
        longest = max((len(t) for t in texts), default=0)

        codes = []
        i = 0
        while i < len(text):
            for length in range(min(longest, len(text) - i), 0, -1):
                symbol = text[i:i + length]
                if symbol in texts:
                    codes.append(self.tree.lookup_code(symbol))
                    i += length
                    break
            else:
                if self.strict:
                    raise UnmappedTextError(text[i])
                i += 1
        return ''.join(codes)

    def encode_stream(self, input_stream):
        output = io.StringIO()
        for line in input_stream:
            output.write(self.encode(line.rstrip('\r\n')) + '\n')
        output.seek(0)
        return output

    def translate_file(self, infile, outfile):
        """
        Translates a file written in braille and appends the text to outfile,
        one line of text per line of braille.
        """
        if not os.path.isfile(infile):
            raise ReferenceError('File not found')

        with open(infile, 'r', encoding='utf-8') as input_stream:
            output = self.decode(input_stream)
        with open(outfile, 'a', encoding='utf-8') as output_stream:
            output_stream.write(output.read())

    def __decode_cells(self, cells):
        for code in cells:
            try:
                yield self.tree.lookup_text(code)
            except UnmappedCodeError:
                if self.strict:
                    raise
                yield self.placeholder


def main():
    here = os.path.dirname(__file__)
    translator = Translator(read_mapping(os.path.join(here, 'alphabets', 'english.txt')))
    with open(os.path.join(here, 'samples', 'hello.txt'), encoding='utf-8') as input_stream:
        print(translator.decode(input_stream).read(), end='')
    print(translator.encode('braille'))


if __name__ == '__main__':
    main()
