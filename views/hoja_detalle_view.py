import streamlit as st

import config
import ui
from infrastructure.hojas_ruta_client import HojasRutaApiError, HojasRutaClient
from use_cases.rbac_policy import enforce
from utils import navigation

DETAIL_FIELDS = (
    ("numero_hr", "N° H.R."),
    ("referencia", "Referencia"),
    ("procedencia", "Procedencia"),
    ("nombre_solicitante", "Solicitante"),
    ("telefono_celular", "Teléfono"),
    ("cite", "CITE"),
    ("numero_fojas", "Fojas"),
    ("fecha_documento", "Fecha documento"),
    ("fecha_ingreso", "Fecha ingreso"),
    ("estado", "Estado"),
    ("ubicacion_actual", "Ubicación actual"),
    ("responsable_actual", "Responsable actual"),
)

ACTION_LABELS = (
    ("edit", "Editar"),
    ("delete", "Eliminar"),
    ("delete_progress", "Eliminar progreso"),
    ("unfinalize", "Reabrir (finalizada → en proceso)"),
)

def available_actions(caps):
    """Labels of the controls the current user may see on a hoja de ruta."""
    return [label for name, label in ACTION_LABELS if getattr(caps, name)]

def render_detalle(manager, hoja_id):
    if st.button("⬅ Volver"):
        navigation.navigate("registros")

    if not enforce(manager.user, "read"):
        st.error("No tienes permiso para ver hojas de ruta.")
        return

    if not hoja_id:
        st.info("Sin datos")
        return

    client = HojasRutaClient(config.api_base_url(), manager.token, timeout=config.api_timeout())
    try:
        with st.spinner("Cargando..."):
            hoja = client.get_hoja(hoja_id)
    except HojasRutaApiError:
        st.error("No se pudo cargar la hoja de ruta.")
        return

    st.title(f"Hoja de Ruta {hoja.get('numero_hr', hoja_id)}")
    st.markdown(ui.priority_badge_html(hoja.get("prioridad")), unsafe_allow_html=True)

    left, right = st.columns(2)
    for i, (field, label) in enumerate(DETAIL_FIELDS):
        value = hoja.get(field)
        (left if i % 2 == 0 else right).markdown(f"**{label}:** {value if value not in (None, '') else '—'}")

    actions = available_actions(manager.capabilities())
    if actions:
        st.divider()
        st.markdown('<p class="hr-kicker">Acciones disponibles</p>', unsafe_allow_html=True)
        st.write(" · ".join(actions))
