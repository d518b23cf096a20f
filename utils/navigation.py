import streamlit as st

DEFAULT_ROUTE = "registros"
ROUTES = ("login", "registros", "hoja")

def current_route():
    page = st.query_params.get("page", DEFAULT_ROUTE)
    return page if page in ROUTES else DEFAULT_ROUTE

def navigate(page, **params):
    """
    Single place that changes the page.
    Replaces every query param, so nothing from the previous page leaks into the next one.
    """
    st.query_params.clear()
    st.query_params["page"] = page
    for key, value in params.items():
        st.query_params[key] = str(value)
    st.rerun()
