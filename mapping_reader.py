import os.path
from code_tree import CodeTree

CELL_WIDTH = 6  # six dot braille
BLANK_TEXT = ' '
SEPARATOR = ' '


class MappingFormatError(ValueError):
    def __init__(self, line_number, line):
        super().__init__('Line {}: no separator after the code in {!r}'.format(line_number, line))
        self.line_number = line_number
        self.line = line


def parse_line(line):
    """
    Splits a table line into the code and the text it stands for.
    Everything after the first space is text, so '000000  ' maps the code to a space.
    """
    line = line.rstrip('\r\n')
    index = line.find(SEPARATOR)
    if index <= 0:
        return None
    return line[:index], line[index + 1:]


class MappingReader:
    """
    Reads a braille alphabet, one character per line: the six bits of the dots in top to bottom,
    left to right order, a space, then the text of the character.
    """
    def __init__(self):
        self.name = None
        self.file = None
        self.pairs = []

    def open(self, file):
        if os.path.isfile(file):
            if self.file:
                self.file.close()
            self.file = open(file, 'r', encoding='utf-8', newline='')
            self.name = os.path.basename(file)
        else:
            raise ReferenceError('File not found')
        return self

    def close(self):
        if self.file:
            self.file.close()
            self.file = None
        else:
            raise ReferenceError('Nothing is opened')

    def read_pairs(self):
        if not self.file:
            raise ReferenceError('Nothing is opened')

        self.file.seek(0)
        self.pairs = []
        for line_number, line in enumerate(self.file, start=1):
            if not line.strip('\r\n'):
                continue
            pair = parse_line(line)
            if pair is None:
                raise MappingFormatError(line_number, line.rstrip('\r\n'))
            self.pairs.append(pair)
        return self.pairs

    def get_tree(self):
        pairs = self.read_pairs()
        width = len(pairs[0][0]) if pairs else CELL_WIDTH

        tree = CodeTree(pairs, width)
        tree.insert_or_replace('0' * width, BLANK_TEXT)  # all flat dots is a blank cell
        return tree


def read_mapping(file):
    reader = MappingReader().open(file)
    try:
        return reader.get_tree()
    finally:
        reader.close()


def main():
    tree = read_mapping(os.path.join(os.path.dirname(__file__), 'alphabets', 'english.txt'))
    print(tree)


if __name__ == '__main__':
    main()
