import html

import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder, GridUpdateMode

from services import registros_service

def setup_style():
    st.markdown("""
    <style>
        :root {
            --color-morado-50: #f6f1fb;
            --color-primary: #6b3fa0;
            --color-gris-600: #5b5f6b;
            --card-bg: linear-gradient(145deg, rgba(20,23,32,0.9), rgba(12,13,18,0.94));
            --card-border: rgba(255, 255, 255, 0.10);
        }

        .hr-card {
            border-radius: 24px;
            padding: 1.6rem;
            border: 1px solid var(--card-border);
            background: var(--card-bg);
            box-shadow: 0 18px 42px rgba(0, 0, 0, 0.35);
            margin-bottom: 1rem;
        }

        .hr-kicker {
            font-size: 0.72rem;
            letter-spacing: 0.16em;
            text-transform: uppercase;
            color: rgba(253, 230, 138, 0.8);
        }

        .hr-mark {
            background: #facc15;
            color: #000;
            padding: 0 0.25rem;
            border-radius: 4px;
            font-weight: 600;
        }

        .hr-badge {
            display: inline-flex;
            flex-direction: column;
            gap: 4px;
            font-size: 0.75rem;
            font-weight: 600;
            letter-spacing: 0.04em;
        }

        .hr-badge-bar {
            height: 2px;
            width: 38px;
            border-radius: 999px;
        }

        .hr-loading {
            min-height: 60vh;
            display: flex;
            align-items: center;
            justify-content: center;
            background: var(--color-morado-50);
            border-radius: 24px;
        }

        .hr-spinner {
            width: 48px;
            height: 48px;
            margin: 0 auto 1rem auto;
            border-radius: 50%;
            border-bottom: 2px solid var(--color-primary);
            animation: hr-spin 0.9s linear infinite;
        }

        @keyframes hr-spin {
            to { transform: rotate(360deg); }
        }
    </style>
    """, unsafe_allow_html=True)

def show_loading_overlay(message="Cargando..."):
    """Non-interactive placeholder shown while the session is being restored."""
    st.markdown(
        f"""
        <div class="hr-loading">
          <div style="text-align:center">
            <div class="hr-spinner"></div>
            <p style="color: var(--color-gris-600)">{html.escape(message)}</p>
          </div>
        </div>
        """,
        unsafe_allow_html=True
    )

def priority_badge_html(prioridad):
    style = registros_service.priority_style(prioridad)
    return (
        f'<span class="hr-badge" style="color:{style["color"]}">'
        f'<span>{style["label"]}</span>'
        f'<span class="hr-badge-bar" style="background-color:{style["color"]}"></span>'
        f'</span>'
    )

def highlight_html(text, query):
    parts = []
    for segment, matched in registros_service.highlight_segments(text, query):
        safe = html.escape(segment)
        parts.append(f'<span class="hr-mark">{safe}</span>' if matched else safe)
    return "".join(parts)

def render_aggrid(df, height=420, pagination=True, theme="balham"):
    if df.empty:
        st.info("No hay hojas de ruta para mostrar")
        return

    gb = GridOptionsBuilder.from_dataframe(df)
    gb.configure_default_column(filterable=True, sortable=True, resizable=True, wrapText=True, autoHeight=True)
    for col in df.columns:
        gb.configure_column(col, minWidth=120, flex=2)

    if pagination:
        gb.configure_pagination(paginationAutoPageSize=False, paginationPageSize=25)

    gb.configure_selection(selection_mode="single", use_checkbox=False)
    gb.configure_grid_options(wrapHeaderText=True, autoHeaderHeight=True)
    grid_options = gb.build()

    valid_themes = ["streamlit", "alpine", "balham", "material"]
    safe_theme = theme if theme in valid_themes else "balham"

    return AgGrid(
        df,
        gridOptions=grid_options,
        height=height,
        theme=safe_theme,
        custom_css={
            ".ag-root-wrapper": {
                "border-radius": "14px",
                "overflow": "hidden",
                "border": "1px solid rgba(255, 255, 255, 0.10)",
            },
            ".ag-header-cell-label": {"font-weight": "600"},
        },
        update_mode=GridUpdateMode.SELECTION_CHANGED,
    )
