"""Export-Modul: tabellarische Aufbereitung der Stundenpläne für Anzeige und Export."""

from export.tui_renderer import render_standard_rows, render_faculty_rows

__all__ = ["render_standard_rows", "render_faculty_rows"]
