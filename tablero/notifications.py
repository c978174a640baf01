from typing import Optional, Protocol

from tablero.log_utils import emit


class NotificationPort(Protocol):
    def success(self, message: str, description: Optional[str] = None) -> None: ...

    def error(self, message: str, description: Optional[str] = None) -> None: ...


class CONSOLE_NOTIFIER:
    """Notificaciones en consola (scripts y pruebas manuales)."""

    def __init__(self, logger=None):
        self.logger = logger

    def success(self, message, description=None):
        text = f"✅ {message}" + (f" - {description}" if description else "")
        emit(text, "success", self.logger)

    def error(self, message, description=None):
        text = f"❌ {message}" + (f" - {description}" if description else "")
        emit(text, "error", self.logger)


class STREAMLIT_NOTIFIER:
    """
    Toasts de Streamlit. Los mensajes se encolan en session_state y se muestran
    con flush(), así sobreviven a un st.rerun() después de guardar.
    """

    PENDING_KEY = "_tablero_pending_toasts"

    def __init__(self, st):
        self.st = st

    def _push(self, icon, message, description):
        text = message if not description else f"{message}\n\n{description}"
        self.st.session_state.setdefault(self.PENDING_KEY, []).append((icon, text))

    def success(self, message, description=None):
        self._push("✅", message, description)

    def error(self, message, description=None):
        self._push("❌", message, description)

    def flush(self):
        pending = self.st.session_state.pop(self.PENDING_KEY, [])
        for icon, text in pending:
            self.st.toast(text, icon=icon)
