"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) y la taxonomía de errores.
- El dominio no conoce el sistema de ficheros, la CLI ni la consola.
"""
