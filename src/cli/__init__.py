"""Capa CLI (Typer + Rich): comandos, shell interactivo y componentes visuales."""
