"""Servicios del Core.

Por qué un paquete:
- Un módulo por paso del pipeline (manifest, solution config, scanner, writer).
- `deployment_pipeline` los encadena y es la única operación pública.
"""
