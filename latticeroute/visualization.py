"""ASCII rendering of lattices for logs and tests."""
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .algorithms.base.grid import Lattice2D

RIGHT = "-"
DOWN = "|"
DOWN_RIGHT = "\\"
DOWN_LEFT = "/"
CROSS = "x"


def render_lattice(lattice: 'Lattice2D') -> str:
    """Render a lattice as a grid of ``(index)`` cells joined by connector glyphs.

    The first line holds column headers, then each lattice row takes two
    lines: the cells with their row header, and the downward connectors.
    ``-`` joins right neighbours, ``|`` bottom ones, ``\\`` and ``/`` the
    diagonals, and ``x`` marks two crossing diagonals.
    """
    if lattice.columns == 0 or lattice.rows == 0:
        return "\r\n"

    index_digits = len(str(lattice.size))
    row_digits = len(str(lattice.rows))
    index_mid = (index_digits + 1) // 2
    cell_width = index_digits + 3
    line_width = row_digits + lattice.columns * cell_width + 1
    line_count = lattice.rows * 2

    buffer: List[str] = [" "] * (line_count * line_width)
    for line in range(1, line_count + 1):
        buffer[line * line_width - 1] = "\n"

    def write(offset: int, text: str):
        buffer[offset:offset + len(text)] = list(text)

    # Column headers
    header_offset = row_digits + 2
    for column in range(lattice.columns):
        label = str(column)
        left_space = (index_digits - len(label)) // 2
        write(header_offset + column * cell_width + left_space, label)

    # Row headers
    for row in range(lattice.rows):
        label = str(row)
        write(line_width + 2 * row * line_width + row_digits - len(label), label)

    cells_offset = line_width + row_digits + 2
    for index in range(lattice.size):
        column, row = lattice.to_vertex_coords(index)
        cell = cells_offset + 2 * row * line_width + column * cell_width
        label = str(index)
        write(cell + (index_digits - len(label)) // 2, label)
        buffer[cell - 1] = "("
        buffer[cell + index_digits] = ")"

        below = cell + line_width
        for neighbour_column, neighbour_row in lattice.neighbours((column, row)):
            if neighbour_column > column and neighbour_row == row:
                buffer[cell + index_digits + 1] = RIGHT
            elif neighbour_row > row and neighbour_column == column:
                buffer[below + index_mid - 1] = DOWN
            elif neighbour_column > column and neighbour_row > row:
                buffer[below + index_digits + 1] = DOWN_RIGHT
            elif neighbour_column < column and neighbour_row > row:
                # Shares its slot with the previous cell's down-right connector
                if buffer[below - 2] == DOWN_RIGHT:
                    buffer[below - 2] = CROSS
                else:
                    buffer[below - 2] = DOWN_LEFT

    return "\r\n" + "".join(buffer)
