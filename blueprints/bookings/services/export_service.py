"""Excel export of a restaurant's bookings."""

import io

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

from utils.helpers import format_date
from utils.messages import MESSAGES

HEADERS = [
    'Date', 'Heure', 'Nom', 'Email', 'Téléphone', 'Adultes', 'Enfants',
    'Statut', 'Table', 'Arrivée', 'Départ', 'Addition', 'Demande spéciale'
]

COLUMN_WIDTHS = [12, 8, 26, 30, 18, 9, 9, 24, 10, 9, 9, 11, 40]

HEADER_ROW = 4


def build_bookings_workbook(restaurant: dict, bookings: list, period_label: str) -> bytes:
    """
    Build an .xlsx workbook listing bookings.

    Args:
        restaurant: Restaurant dict (title)
        bookings: Booking dicts to export
        period_label: Period shown under the title (e.g. '2026-03')

    Returns:
        Workbook file content
    """
    wb = Workbook()
    ws = wb.active
    ws.title = 'Réservations'

    header_font = Font(bold=True, color='FFFFFF', size=11)
    header_fill = PatternFill(start_color='18181B', end_color='18181B', fill_type='solid')
    thin_border = Border(
        left=Side(style='thin', color='D4D4D4'),
        right=Side(style='thin', color='D4D4D4'),
        top=Side(style='thin', color='D4D4D4'),
        bottom=Side(style='thin', color='D4D4D4')
    )
    alt_fill = PatternFill(start_color='F5F5F5', end_color='F5F5F5', fill_type='solid')

    # Title rows
    last_column = chr(ord('A') + len(HEADERS) - 1)
    ws.merge_cells(f'A1:{last_column}1')
    title_cell = ws.cell(row=1, column=1, value=f'Réservations - {restaurant["name"]}')
    title_cell.font = Font(bold=True, size=14, color='18181B')
    title_cell.alignment = Alignment(horizontal='center', vertical='center')

    ws.merge_cells(f'A2:{last_column}2')
    subtitle_cell = ws.cell(row=2, column=1, value=f'Période: {period_label} | Total: {len(bookings)} réservations')
    subtitle_cell.font = Font(size=10, color='666666')
    subtitle_cell.alignment = Alignment(horizontal='center', vertical='center')

    for col, header in enumerate(HEADERS, start=1):
        cell = ws.cell(row=HEADER_ROW, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
        cell.border = thin_border

    for index, booking in enumerate(bookings):
        row = HEADER_ROW + 1 + index
        values = [
            format_date(booking['date']),
            booking['time'],
            f'{booking["first_name"]} {booking["last_name"]}',
            booking.get('email') or '',
            booking.get('phone') or '',
            booking['guests'],
            booking.get('children') or 0,
            MESSAGES.get(f'status_{booking["status"]}', booking['status']),
            booking.get('table_id') or '',
            booking.get('arrival_time') or '',
            booking.get('departure_time') or '',
            booking.get('bill_amount'),
            booking.get('special_request') or '',
        ]
        for col, value in enumerate(values, start=1):
            cell = ws.cell(row=row, column=col, value=value)
            cell.border = thin_border
            cell.alignment = Alignment(vertical='center')
            if index % 2 == 1:
                cell.fill = alt_fill

    for col, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[chr(ord('A') + col - 1)].width = width

    ws.freeze_panes = f'A{HEADER_ROW + 1}'

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
