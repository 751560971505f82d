"""
Streamlit UI for Manu-shop.
"""
