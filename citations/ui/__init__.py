"""Streamlit surface for the citation desk."""
