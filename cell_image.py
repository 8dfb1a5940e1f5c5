from PIL import Image, ImageDraw
from code_tree import MalformedCodeError
from mapping_reader import CELL_WIDTH

ROWS = 3
COLUMNS = 2
DOT_SPACING = 20  # px between dot centres inside a cell
DOT_RADIUS = 6
CELL_GAP = 20  # px between neighbouring cells
MARGIN = 10

BACKGROUND = (255, 255, 255)
FOREGROUND = (0, 0, 0)


def dot_positions(code):
    """
    Yields (column, row, raised) for the six dots of a cell.
    Bits go top to bottom in the left column, then top to bottom in the right one.
    """
    if len(code) != CELL_WIDTH or any(bit not in '01' for bit in code):
        raise MalformedCodeError('Not a six dot cell: {!r}'.format(code))
    for i, bit in enumerate(code):
        yield i // ROWS, i % ROWS, bit == '1'


def draw_cells(codes, cells_per_row=20, show_flat=True):
    if cells_per_row < 1:
        raise ValueError('Illegal cells per row')
    codes = list(codes)
    cell_width = (COLUMNS - 1) * DOT_SPACING + 2 * DOT_RADIUS
    cell_height = (ROWS - 1) * DOT_SPACING + 2 * DOT_RADIUS
    columns = max(1, min(cells_per_row, len(codes)))
    lines = max(1, (len(codes) + cells_per_row - 1) // cells_per_row)

    size = (2 * MARGIN + columns * cell_width + (columns - 1) * CELL_GAP,
            2 * MARGIN + lines * cell_height + (lines - 1) * CELL_GAP)
    image = Image.new('RGB', size, BACKGROUND)
    draw = ImageDraw.Draw(image)

    for index, code in enumerate(codes):
        left = MARGIN + (index % cells_per_row) * (cell_width + CELL_GAP)
        top = MARGIN + (index // cells_per_row) * (cell_height + CELL_GAP)
        for column, row, raised in dot_positions(code):
            x = left + DOT_RADIUS + column * DOT_SPACING
            y = top + DOT_RADIUS + row * DOT_SPACING
            box = (x - DOT_RADIUS, y - DOT_RADIUS, x + DOT_RADIUS, y + DOT_RADIUS)
            if raised:
                draw.ellipse(box, fill=FOREGROUND)
            elif show_flat:
                draw.ellipse(box, outline=FOREGROUND)

    return image


def save_cells(codes, file, **kwargs):
    draw_cells(codes, **kwargs).save(file)
