import pandas as pd
import streamlit as st

import config
import ui
from infrastructure.hojas_ruta_client import HojasRutaApiError, HojasRutaClient
from services import registros_service
from use_cases.rbac_policy import enforce
from utils import navigation

SEARCH_FIELDS = ("numero_hr", "referencia", "procedencia", "nombre_solicitante", "cite")

def _client(manager):
    return HojasRutaClient(config.api_base_url(), manager.token, timeout=config.api_timeout())

def _render_matches(hojas, query):
    st.markdown('<p class="hr-kicker">Coincidencias</p>', unsafe_allow_html=True)
    for hoja in hojas[:20]:
        fields = [f for f in SEARCH_FIELDS if registros_service.is_field_match(hoja.get(f), query)]
        if not fields:
            continue
        lines = [f"{ui.priority_badge_html(hoja.get('prioridad'))}"]
        for field in fields:
            lines.append(f"<b>{field}</b>: {ui.highlight_html(hoja.get(field), query)}")
        st.markdown("<br>".join(lines), unsafe_allow_html=True)

def render_registros(manager):
    user = manager.user

    st.markdown('<p class="hr-kicker">Dashboard</p>', unsafe_allow_html=True)
    st.title("Registros")
    if user is not None:
        st.caption(f"{user.nombre_completo or user.username} · {user.rol or 'usuario'}")

    query = st.text_input("Buscar", key="search_query", placeholder="N° H.R., referencia, procedencia...")

    try:
        with st.spinner("Cargando..."):
            hojas = _client(manager).list_hojas(query)
    except HojasRutaApiError:
        st.error("Error al cargar hojas de ruta")
        return

    groups = registros_service.group_by_priority(hojas)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total", len(hojas))
    c2.metric("Urgentes", len(groups["urgentes"]))
    c3.metric("Prioritarios", len(groups["prioritarios"]))
    c4.metric("Rutinarios", len(groups["rutinarios"]))

    if query.strip() and hojas:
        _render_matches(hojas, query.strip())

    grid = ui.render_aggrid(registros_service.to_table(hojas))
    selected = _selected_row(grid)
    if selected is not None and 0 <= selected < len(hojas):
        hoja = hojas[selected]
        if hoja.get("id") is not None and enforce(user, "read"):
            navigation.navigate("hoja", id=hoja["id"])

def _selected_row(grid):
    if grid is None:
        return None
    rows = grid.get("selected_rows")
    if rows is None or len(rows) == 0:
        return None
    # newer st_aggrid returns a DataFrame indexed by row position
    if isinstance(rows, pd.DataFrame):
        try:
            return int(rows.index[0])
        except (TypeError, ValueError):
            return None
    return rows[0].get("_selectedRowNodeInfo", {}).get("nodeRowIndex")
