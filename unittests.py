import unittest
import io
import os
import tempfile
from code_tree import CodeTree, MalformedCodeError, UnmappedCodeError, UnmappedTextError
from cell_input_stream import CellInputStream
from mapping_reader import MappingReader, MappingFormatError, parse_line, read_mapping
from translator import Translator
from PIL import Image
from cell_image import draw_cells, dot_positions, save_cells

HERE = os.path.dirname(os.path.abspath(__file__))
ALPHABET = os.path.join(HERE, 'alphabets', 'english.txt')
SAMPLE = os.path.join(HERE, 'samples', 'hello.txt')


class CodeTreeTests(unittest.TestCase):
    def setUp(self):
        self.tree = CodeTree([('101', 'a'), ('110', 'b'), ('000', ' ')])

    def test_lookup_text(self):
        self.assertEqual('a', self.tree.lookup_text('101'))
        self.assertEqual('b', self.tree.lookup_text('110'))
        self.assertEqual(' ', self.tree.lookup_text('000'))

    def test_lookup_code(self):
        self.assertEqual('101', self.tree.lookup_code('a'))
        self.assertEqual('110', self.tree.lookup_code('b'))
        self.assertEqual('000', self.tree.lookup_code(' '))

    def test_lookup_code_not_found(self):
        self.assertIsNone(self.tree.lookup_code('z'))
        self.assertIsNone(self.tree.lookup_code('∄'))
        self.assertIsNone(self.tree.lookup_code(''))

    def test_unmapped_code(self):
        with self.assertRaises(UnmappedCodeError) as context:
            self.tree.lookup_text('111')
        self.assertEqual('111', context.exception.code)
        self.assertIsInstance(context.exception, LookupError)

    def test_code_without_symbol(self):
        tree = CodeTree([('10', 'a'), ('11', '')])
        self.assertEqual('', tree.lookup_text('11'))
        self.assertFalse(tree.has_code('11'))
        self.assertFalse(tree.has_code('01'))
        self.assertTrue('10' in tree)

    def test_overwrite(self):
        self.tree.insert_or_replace('101', 'x')
        self.assertEqual('x', self.tree.lookup_text('101'))
        self.assertIsNone(self.tree.lookup_code('a'))

    def test_idempotent_insert(self):
        before = str(self.tree)
        self.tree.insert_or_replace('110', 'b')
        self.tree.insert_or_replace('110', 'b')
        self.assertEqual(before, str(self.tree))
        self.assertEqual(3, len(self.tree))

    def test_malformed_code(self):
        for code in ('', '10a', '1010', '10'):
            with self.assertRaises(MalformedCodeError):
                self.tree.insert_or_replace(code, 'c')
            with self.assertRaises(MalformedCodeError):
                self.tree.lookup_text(code)
        self.assertIsInstance(MalformedCodeError('x'), ValueError)

    def test_width_from_first_code(self):
        tree = CodeTree()
        self.assertIsNone(tree.width)
        tree.insert_or_replace('0110', 'q')
        self.assertEqual(4, tree.width)

    def test_duplicate_text_is_deterministic(self):
        tree = CodeTree([('110', 'x'), ('011', 'x'), ('100', 'y')])
        self.assertEqual('011', tree.lookup_code('x'))
        self.assertEqual('011', tree.lookup_code('x'))

    def test_items_order(self):
        self.assertEqual([('000', ' '), ('101', 'a'), ('110', 'b')], list(self.tree.items()))
        self.assertEqual("Code 000: Symbol ' '\nCode 101: Symbol 'a'\nCode 110: Symbol 'b'\n", str(self.tree))


class CellInputStreamTests(unittest.TestCase):
    def setUp(self):
        self.input_stream = CellInputStream(io.StringIO('101\n110\r\n000'), 3)

    def test_read_codes(self):
        self.assertEqual(0, self.input_stream.get_position())
        self.assertEqual('1', self.input_stream.read())
        self.assertEqual(1, self.input_stream.get_position())
        self.assertEqual('01', self.input_stream.read() + self.input_stream.read())
        self.assertEqual(0, self.input_stream.get_position())
        self.assertEqual('110', self.input_stream.read_code())
        self.assertEqual('000', self.input_stream.read_code())
        with self.assertRaises(EOFError):
            self.input_stream.read_code()

    def test_iterate(self):
        self.assertEqual(['101', '110', '000'], list(self.input_stream))

    def test_partial_cell(self):
        stream = CellInputStream(io.StringIO('1011'), 3)
        self.assertEqual('101', stream.read_code())
        with self.assertRaises(MalformedCodeError):
            stream.read_code()

    def test_requires_text_stream(self):
        with self.assertRaises(TypeError):
            CellInputStream(io.BytesIO(b'101'), 3)

    def test_width_required(self):
        with self.assertRaises(ValueError):
            CellInputStream(io.StringIO(''), None)

    def test_close(self):
        stream = io.StringIO('101')
        CellInputStream(stream, 3).close()
        self.assertTrue(stream.closed)


class MappingReaderTests(unittest.TestCase):
    def setUp(self):
        self.reader = MappingReader().open(ALPHABET)

    def tearDown(self):
        self.reader.close()

    def test_parse_line(self):
        self.assertEqual(('100000', 'a'), parse_line('100000 a\n'))
        self.assertEqual(('000000', ' '), parse_line('000000  \r\n'))
        self.assertEqual(('111111', 'and so'), parse_line('111111 and so'))
        self.assertIsNone(parse_line('100000'))

    def test_read_pairs(self):
        pairs = self.reader.read_pairs()
        self.assertEqual(('100000', 'a'), pairs[0])
        self.assertIn(('001001', '-'), pairs)

    def test_get_tree(self):
        tree = self.reader.get_tree()
        self.assertEqual(6, tree.width)
        self.assertEqual(' ', tree.lookup_text('000000'))
        self.assertEqual('z', tree.lookup_text('101011'))
        for code, text in self.reader.pairs:
            self.assertEqual(text, tree.lookup_text(code))
            self.assertEqual(code, tree.lookup_code(text))

    def test_file_not_found(self):
        with self.assertRaises(ReferenceError):
            MappingReader().open(os.path.join(HERE, 'alphabets', 'missing.txt'))

    def test_nothing_opened(self):
        with self.assertRaises(ReferenceError):
            MappingReader().read_pairs()

    def test_bad_line(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, 'bad.txt')
            with open(path, 'w', encoding='utf-8') as f:
                f.write('100000 a\n\n110000\n')
            with self.assertRaises(MappingFormatError) as context:
                read_mapping(path)
            self.assertEqual(3, context.exception.line_number)

    def test_close_nothing_opened(self):
        with self.assertRaises(ReferenceError):
            MappingReader().close()

    def test_open_again_closes_previous_file(self):
        previous = self.reader.file
        self.reader.open(ALPHABET)
        self.assertTrue(previous.closed)
        self.assertFalse(self.reader.file.closed)

    def test_line_starting_with_separator(self):
        self.assertIsNone(parse_line(' a'))
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, 'bad.txt')
            with open(path, 'w', encoding='utf-8') as f:
                f.write(' a\n')
            with self.assertRaises(MappingFormatError) as context:
                read_mapping(path)
            self.assertEqual(1, context.exception.line_number)


class TranslatorTests(unittest.TestCase):
    def setUp(self):
        self.translator = Translator(CodeTree([('101', 'a'), ('110', 'b'), ('000', ' ')]))

    def test_decode_line(self):
        self.assertEqual('ab ', self.translator.decode_line('101110000'))
        self.assertEqual('', self.translator.decode_line(''))

    def test_decode_partial_cell(self):
        with self.assertRaises(MalformedCodeError):
            self.translator.decode_line('1011')

    def test_decode_unmapped(self):
        with self.assertRaises(UnmappedCodeError):
            self.translator.decode_line('101111')
        lenient = Translator(self.translator.tree, strict=False)
        self.assertEqual('a?', lenient.decode_line('101111'))

    def test_encode(self):
        self.assertEqual('101110000101', self.translator.encode('ab a'))
        with self.assertRaises(UnmappedTextError):
            self.translator.encode('abc')
        self.assertEqual('101110', Translator(self.translator.tree, strict=False).encode('abc'))

    def test_decode_stream(self):
        output = self.translator.decode(io.StringIO('101110\n000101\n'))
        self.assertEqual('ab\n a\n', output.read())

    def test_translate_file(self):
        translator = Translator(read_mapping(ALPHABET))
        with tempfile.TemporaryDirectory() as directory:
            outfile = os.path.join(directory, 'out.txt')
            translator.translate_file(SAMPLE, outfile)
            translator.translate_file(SAMPLE, outfile)
            with open(outfile, encoding='utf-8') as f:
                self.assertEqual('hello world\nthe end.\n' * 2, f.read())

    def test_translate_missing_file(self):
        with self.assertRaises(ReferenceError):
            self.translator.translate_file(os.path.join(HERE, 'samples', 'missing.txt'), 'out.txt')

    def test_round_trip(self):
        translator = Translator(read_mapping(ALPHABET))
        text = "it's a test, isn't it?"
        self.assertEqual(text, translator.decode_line(translator.encode(text)))

    def test_encode_stream(self):
        output = self.translator.encode_stream(io.StringIO('ab\n a\n'))
        self.assertEqual(0, output.tell())
        self.assertEqual(['101110', '000101'], output.read().splitlines())

    def test_multi_character_symbols(self):
        translator = Translator(CodeTree([('11', 'ch'), ('10', 'a'), ('01', 'c')]))
        self.assertEqual('cha', translator.decode_line('1110'))
        self.assertEqual('1110', translator.encode('cha'))
        self.assertEqual('0110', translator.encode('ca'))

    def test_encode_reports_missing_character(self):
        translator = Translator(read_mapping(ALPHABET))
        with self.assertRaises(UnmappedTextError) as context:
            translator.encode('Hi')
        self.assertEqual('H', context.exception.text)

    def test_empty_tree(self):
        translator = Translator(CodeTree())
        self.assertEqual('', translator.decode_line(''))
        self.assertEqual('', translator.encode(''))
        with self.assertRaises(MalformedCodeError):
            translator.decode_line('101')
        with self.assertRaises(UnmappedTextError):
            translator.encode('a')

    def test_cells_split_per_line(self):
        self.assertEqual(['101', '110'], list(self.translator.cells('101\n110\n')))
        with self.assertRaises(MalformedCodeError):
            list(self.translator.cells('10\n1110'))


class CellImageTests(unittest.TestCase):
    def test_dot_positions(self):
        dots = list(dot_positions('100100'))
        self.assertEqual((0, 0, True), dots[0])
        self.assertEqual((1, 0, True), dots[3])
        self.assertEqual((0, 2, False), dots[2])
        with self.assertRaises(MalformedCodeError):
            list(dot_positions('101'))

    def test_draw_cells(self):
        image = draw_cells(['100000', '000000', '111111'], cells_per_row=2)
        self.assertEqual('RGB', image.mode)
        self.assertGreater(image.size[1], image.size[0] // 2)
        # centre of dot 1 of the first cell is raised
        self.assertEqual((0, 0, 0), image.getpixel((16, 16)))
        # centre of dot 4 of the first cell is flat
        self.assertEqual((255, 255, 255), image.getpixel((36, 16)))

    def test_save_cells(self):
        codes = ['110010', '010100']
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, 'cells.png')
            save_cells(codes, path)
            with Image.open(path) as image:
                self.assertEqual(draw_cells(codes).size, image.size)

    def test_illegal_cells_per_row(self):
        with self.assertRaises(ValueError):
            draw_cells(['100000'], cells_per_row=0)


if __name__ == '__main__':
    unittest.main()
