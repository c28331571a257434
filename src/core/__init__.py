"""Core: dominio, contratos y servicios del registro tenant-wide."""
