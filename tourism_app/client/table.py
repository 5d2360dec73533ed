# tourism_app/client/table.py


class TextTable:
    """
    Текстовая таблица: заголовок и тело, которое очищается
    и заполняется заново при каждом показе новых данных.
    """

    def __init__(self, headers):
        self.headers = [str(h) for h in headers]
        self.rows = []

    def clear(self):
        self.rows = []

    def insert_row(self, cells):
        row = ['' if cell is None else str(cell) for cell in cells]
        # короткие строки дополняются пустыми ячейками
        row += [''] * (len(self.headers) - len(row))
        self.rows.append(row[:len(self.headers)])

    def repopulate(self, rows):
        self.clear()
        for cells in rows:
            self.insert_row(cells)
        return self

    def render(self) -> str:
        widths = [len(h) for h in self.headers]
        for row in self.rows:
            widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

        def line(cells):
            return ' | '.join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

        separator = '-+-'.join('-' * width for width in widths)
        return '\n'.join([line(self.headers), separator] + [line(row) for row in self.rows])


def render_table(headers, rows) -> str:
    return TextTable(headers).repopulate(rows).render()
