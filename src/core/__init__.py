"""Core de catalog-d2: dominio, contratos, configuración y el controlador de lista."""
