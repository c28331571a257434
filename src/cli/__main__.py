"""`python -m cli add-deployment-info ...` (con el paquete instalado)."""

from cli.main import run

run()
