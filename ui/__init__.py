"""Renderers: curses for the terminal, Streamlit for the browser."""
