"""Adaptadores de infraestructura (ficheros, consola, plantillas)."""
