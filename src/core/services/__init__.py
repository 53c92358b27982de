"""Servicios del Core.

Por qué:
- Aquí vive la orquestación (controlador de lista, editor de detalle) sin
  printing ni I/O directo; la CLI solo renderiza lo que estos producen.
"""
