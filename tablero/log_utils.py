from colorama import Fore, Style, init

init(autoreset=True)

_COLORS = {
    "info": Fore.BLUE,
    "success": Fore.GREEN,
    "warning": Fore.YELLOW,
    "error": Fore.RED,
    "summary": Fore.CYAN,
}


def emit(msg, level="info", logger=None):
    """
    Imprime el mensaje con color en consola y, si `logger` es callable,
    se lo reenvía en texto plano (p. ej. el placeholder de Streamlit).
    """
    color = _COLORS.get(level, "")
    print(color + str(msg) + Style.RESET_ALL)
    if callable(logger):
        logger(str(msg))


class LineLogger:
    """Acumula mensajes y refresca un placeholder con todas las líneas."""

    def __init__(self, placeholder=None):
        self.placeholder = placeholder
        self.lines = []

    def __call__(self, msg):
        self.lines.append(str(msg))
        if self.placeholder is not None:
            self.placeholder.text("\n".join(self.lines))
