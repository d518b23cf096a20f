import streamlit as st

from infrastructure.observability import setup_observability
setup_observability()

import ui
from use_cases import bootstrap, route_guard
from utils import navigation, session_manager
from views import hoja_detalle_view, login_view, registros_view

# --- PAGE SETUP ---
st.set_page_config(page_title="SEDEGES · Hojas de Ruta", page_icon="📄", layout="wide")
ui.setup_style()

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

manager = session_manager.get_session_manager()
page = navigation.current_route()

# --- PUBLIC ROUTE ---
if page == route_guard.LOGIN_ROUTE:
    login_view.render_login(manager)
    st.stop()

# --- ROUTE GUARD ---
decision = route_guard.evaluate_guard(manager)
if decision.action == "LOADING":
    ui.show_loading_overlay()
    st.stop()
elif decision.action == "REDIRECT":
    navigation.navigate(route_guard.LOGIN_ROUTE)
    st.stop()

try:
    import sentry_sdk
    if sentry_sdk.is_initialized():
        sentry_sdk.set_user({"id": manager.user.id, "username": manager.user.username, "role": manager.user.role.value})
except (ImportError, AttributeError):
    pass

# --- SIDEBAR ---
with st.sidebar:
    st.markdown(f"**{manager.user.nombre_completo or manager.user.username}**")
    st.caption(manager.user.rol or "usuario")
    if st.button("📋 Registros", use_container_width=True):
        navigation.navigate("registros")
    if st.button("Cerrar sesión", key="logout_btn", type="secondary", use_container_width=True):
        manager.logout()
        navigation.navigate(route_guard.LOGIN_ROUTE)

# --- PROTECTED ROUTES ---
if page == "hoja":
    hoja_detalle_view.render_detalle(manager, st.query_params.get("id"))
else:
    registros_view.render_registros(manager)
