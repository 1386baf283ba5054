from collections.abc import Sequence
from io import BytesIO

from openpyxl import load_workbook, Workbook


class ExcelList(Sequence):
    """Rows of the active sheet as lists, blank rows skipped."""

    def __init__(self, file):
        wb = self._get_workbook(file)
        ws = wb.active
        self._list = [
            list(row) for row in ws.values
            if any(cell not in (None, '') for cell in row)
        ]

    def _get_workbook(self, file):
        if isinstance(file, Workbook):
            return file
        file = BytesIO(file.read())
        return load_workbook(filename=file, read_only=True, data_only=True)

    def __getitem__(self, index):
        return self._list[index]

    def __len__(self):
        return len(self._list)
