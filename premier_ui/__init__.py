"""Streamlit page helpers for the HT feeder dashboard."""
