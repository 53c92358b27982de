"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- El controlador depende del repositorio y del shell modal, no de httpx/rich.
"""
