"""Package entry point for ``python -m braille_converter``.

WHY: Users run the converter as ``python -m braille_converter libro.epub``
for CLI mode, or ``python -m braille_converter --serve`` for the HTTP API.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
API server with uvicorn. Otherwise, delegates to the CLI's main().
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from braille_converter.server.app import run_api
        run_api()
    else:
        from braille_converter.cli import main
        main()
