"""
Streamlit dashboard for the Air Route Advisor API
"""
