import streamlit as st

from pages import fridagar

st.set_page_config(page_title="Frídagar")
fridagar.show_page()
