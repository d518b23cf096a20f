import streamlit as st

from utils import navigation

def render_login(manager):
    if manager.is_authenticated:
        navigation.navigate(navigation.DEFAULT_ROUTE)

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.header("🔐 Iniciar sesión")
        st.markdown("Sistema de seguimiento de **Hojas de Ruta**")

        with st.form("login_form", clear_on_submit=False):
            username = st.text_input("Usuario")
            password = st.text_input("Contraseña", type="password")
            submitted = st.form_submit_button("Ingresar", use_container_width=True)

        if submitted:
            if not username.strip() or not password:
                st.warning("Completa usuario y contraseña.")
            elif manager.login(username.strip(), password):
                navigation.navigate(navigation.DEFAULT_ROUTE)
            else:
                st.error("Usuario o contraseña incorrectos, o el servidor no está disponible.")
