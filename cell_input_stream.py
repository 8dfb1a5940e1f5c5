import io
from code_tree import MalformedCodeError

LINE_BREAKS = {'\r', '\n'}


class CellInputStream:
    def __init__(self, input_stream, width):
        if not isinstance(input_stream, io.TextIOBase):
            raise TypeError
        if width is None or width < 1:
            raise ValueError('Illegal cell width')
        self._input = input_stream
        self._width = width
        self._bits_read = 0

    def __iter__(self):
        return self

    def __next__(self):
        try:
            return self.read_code()
        except EOFError:
            raise StopIteration

    def get_position(self):
        return self._bits_read % self._width

    def read(self):
        bit = self._input.read(1)
        while bit in LINE_BREAKS:
            bit = self._input.read(1)
        if not bit:
            raise EOFError
        self._bits_read += 1
        return bit

    def read_code(self):
        """
        Reads the next cell from the stream as a bit string of the stream width.
        Line breaks between bits are skipped.
        :return: bit string, e.g. '100000'
        """
        bits = []
        for i in range(0, self._width):
            try:
                bits.append(self.read())
            except EOFError:
                if i == 0:
                    raise
                raise MalformedCodeError('Stream ends inside a cell: {}'.format(''.join(bits)))
        return ''.join(bits)

    def close(self):
        self._input.close()
        self._bits_read = 0
