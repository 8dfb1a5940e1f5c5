class CodeTreeError(Exception):
    pass


class MalformedCodeError(CodeTreeError, ValueError):
    pass


class UnmappedCodeError(CodeTreeError, LookupError):
    def __init__(self, code):
        super().__init__('Code {} has no mapping'.format(code))
        self.code = code


class UnmappedTextError(CodeTreeError, LookupError):
    def __init__(self, text):
        super().__init__('Text {!r} has no code'.format(text))
        self.text = text


class CodeTree:
    """
    Binary tree keyed by fixed-width bit strings. Every '0' is a step to the left child,
    every '1' a step to the right one. Nodes reached by a whole code may carry a text symbol.
    """
    def __init__(self, pairs=(), width=None):
        self.root = Node()
        self.width = width
        for code, text in pairs:
            self.insert_or_replace(code, text)

    def __len__(self):
        return sum(1 for _ in self.items())

    def __contains__(self, code):
        return self.has_code(code)

    def __repr__(self):
        return ''.join("Code {}: Symbol '{}'\n".format(code, text) for code, text in self.items())

    def __str__(self):
        return self.__repr__()

    def insert_or_replace(self, code, text):
        """
        Adds the symbol with the given code, replacing the text if the code is already in the tree.
        :param code: bit string, e.g. '101000'
        :param text: text the code stands for
        """
        self.__check_code(code)
        if self.width is None:
            self.width = len(code)

        node = self.root
        for bit in code:
            if bit == '1':
                if node.right is None:
                    node.right = Node()
                node = node.right
            else:
                if node.left is None:
                    node.left = Node()
                node = node.left
        node.text = text

    def lookup_text(self, code):
        """
        Returns the text stored under the code, or an empty string if the code only passes
        through the tree without a symbol of its own.
        Raises UnmappedCodeError if the path leaves the tree.
        """
        self.__check_code(code)
        node = self.root
        for bit in code:
            node = node.right if bit == '1' else node.left
            if node is None:
                raise UnmappedCodeError(code)
        return node.text

    def lookup_code(self, text):
        """
        Finds the code of the first node holding the text, searching depth first, left before right.
        :return: bit string or None if no node holds the text
        """
        if not text:
            return None
        for code, node_text in self.items():
            if node_text == text:
                return code
        return None

    def has_code(self, code):
        try:
            return self.lookup_text(code) != ''
        except CodeTreeError:
            return False

    def items(self):
        stack = [('', self.root)]
        while stack:
            prefix, node = stack.pop()
            if node.text:
                yield prefix, node.text
            # right is pushed first so that the left subtree is visited first
            if node.right is not None:
                stack.append((prefix + '1', node.right))
            if node.left is not None:
                stack.append((prefix + '0', node.left))

    def __check_code(self, code):
        if not code:
            raise MalformedCodeError('Empty code')
        if any(bit not in '01' for bit in code):
            raise MalformedCodeError('Illegal character in code {!r}'.format(code))
        if self.width is not None and len(code) != self.width:
            raise MalformedCodeError('Code {} has length {}, tree width is {}'.format(code, len(code), self.width))


class Node:
    def __init__(self, text=''):
        self.text = text
        self.left = None
        self.right = None

    def __repr__(self):
        return repr(self.text)


def main():
    pairs = [('101', 'a'), ('110', 'b'), ('000', ' ')]
    code_tree = CodeTree(pairs)
    print(code_tree)
    print(code_tree.lookup_code('b'))


if __name__ == '__main__':
    main()
