import logging
from unittest.mock import MagicMock, patch

from use_cases.rbac_policy import capabilities_for
from use_cases.session_models import User
from views import hoja_detalle_view, login_view, registros_view


def test_available_actions_for_default_user():
    caps = capabilities_for(User(id=1, username="ana", rol="viewer"))
    assert hoja_detalle_view.available_actions(caps) == []


def test_available_actions_for_admin():
    caps = capabilities_for(User(id=1, username="jefe", rol="Administrador"))
    assert hoja_detalle_view.available_actions(caps) == [
        "Editar",
        "Eliminar",
        "Eliminar progreso",
        "Reabrir (finalizada → en proceso)",
    ]


def _columns(spec):
    return [MagicMock() for _ in spec]


@patch("views.login_view.navigation.navigate")
@patch("views.login_view.st")
def test_login_view_shows_error_on_failed_login(mock_st, mock_navigate):
    mock_st.columns.side_effect = _columns
    mock_st.text_input.side_effect = ["ana", "bad"]
    mock_st.form_submit_button.return_value = True
    manager = MagicMock(is_authenticated=False)
    manager.login.return_value = False

    login_view.render_login(manager)

    manager.login.assert_called_once_with("ana", "bad")
    mock_st.error.assert_called_once()
    mock_navigate.assert_not_called()


@patch("views.login_view.navigation.navigate")
@patch("views.login_view.st")
def test_login_view_navigates_on_success(mock_st, mock_navigate):
    mock_st.columns.side_effect = _columns
    mock_st.text_input.side_effect = [" ana ", "pw"]
    mock_st.form_submit_button.return_value = True
    manager = MagicMock(is_authenticated=False)
    manager.login.return_value = True

    login_view.render_login(manager)

    manager.login.assert_called_once_with("ana", "pw")
    mock_navigate.assert_called_once_with("registros")
    mock_st.error.assert_not_called()


@patch("views.login_view.navigation.navigate")
@patch("views.login_view.st")
def test_login_view_requires_both_fields(mock_st, mock_navigate):
    mock_st.columns.side_effect = _columns
    mock_st.text_input.side_effect = ["", ""]
    mock_st.form_submit_button.return_value = True
    manager = MagicMock(is_authenticated=False)

    login_view.render_login(manager)

    manager.login.assert_not_called()
    mock_st.warning.assert_called_once()


def _registros_st(mock_st):
    mock_st.text_input.return_value = ""
    mock_st.columns.side_effect = lambda n: [MagicMock() for _ in range(n)]


@patch("views.registros_view.navigation.navigate")
@patch("views.registros_view.ui")
@patch("views.registros_view._client")
@patch("views.registros_view.st")
def test_registros_row_selection_opens_detail_when_read_allowed(mock_st, mock_client, mock_ui, mock_navigate, caplog):
    _registros_st(mock_st)
    mock_client.return_value.list_hojas.return_value = [{"id": 42, "numero_hr": "HR-1", "prioridad": "urgente"}]
    mock_ui.render_aggrid.return_value = {"selected_rows": [{"_selectedRowNodeInfo": {"nodeRowIndex": 0}}]}
    manager = MagicMock(user=User(id=1, username="ana", rol="viewer"))

    with caplog.at_level(logging.WARNING, logger="use_cases.rbac_policy"):
        registros_view.render_registros(manager)

    mock_navigate.assert_called_once_with("hoja", id=42)
    assert "rbac_denied" not in caplog.text


@patch("views.registros_view.navigation.navigate")
@patch("views.registros_view.ui")
@patch("views.registros_view._client")
@patch("views.registros_view.st")
def test_registros_row_selection_denied_without_read(mock_st, mock_client, mock_ui, mock_navigate, caplog):
    _registros_st(mock_st)
    mock_client.return_value.list_hojas.return_value = [{"id": 42, "numero_hr": "HR-1"}]
    mock_ui.render_aggrid.return_value = {"selected_rows": [{"_selectedRowNodeInfo": {"nodeRowIndex": 0}}]}
    manager = MagicMock(user=None)

    with caplog.at_level(logging.WARNING, logger="use_cases.rbac_policy"):
        registros_view.render_registros(manager)

    mock_navigate.assert_not_called()
    assert "rbac_denied capability=read" in caplog.text


@patch("views.hoja_detalle_view.HojasRutaClient")
@patch("views.hoja_detalle_view.st")
def test_detalle_denied_without_read_never_fetches(mock_st, mock_client_cls, caplog):
    mock_st.button.return_value = False
    manager = MagicMock(user=None, token=None)

    with caplog.at_level(logging.WARNING, logger="use_cases.rbac_policy"):
        hoja_detalle_view.render_detalle(manager, "42")

    mock_client_cls.assert_not_called()
    mock_st.error.assert_called_once()
    assert "rbac_denied capability=read" in caplog.text


@patch("views.hoja_detalle_view.HojasRutaClient")
@patch("views.hoja_detalle_view.st")
def test_detalle_fetches_and_lists_actions_for_admin(mock_st, mock_client_cls):
    mock_st.button.return_value = False
    mock_st.columns.return_value = (MagicMock(), MagicMock())
    mock_client_cls.return_value.get_hoja.return_value = {"id": 42, "numero_hr": "HR-1", "prioridad": "rutinario"}
    user = User(id=1, username="jefe", rol="Administrador")
    manager = MagicMock(user=user, token="tok")
    manager.capabilities.return_value = capabilities_for(user)

    hoja_detalle_view.render_detalle(manager, "42")

    mock_client_cls.return_value.get_hoja.assert_called_once_with("42")
    mock_st.error.assert_not_called()
    mock_st.write.assert_called_once_with("Editar · Eliminar · Eliminar progreso · Reabrir (finalizada → en proceso)")
