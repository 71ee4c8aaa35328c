"""Core (UI-agnostic) HT feeder dashboard logic.

This package contains:
- spreadsheet loading (XLSX -> pandas)
- serial date decoding and time window filtering
- series extraction and colour assignment
- the shared chart pipeline and chart helpers (Altair -> Vega-Lite spec dict)
- per-view state and the dashboard composer
"""
