"""
ecrf-builder - Núcleo de un constructor de formularios eCRF.

Modelo jerárquico del documento (contenedores, controles tipados, columnas
anidadas), fábrica de controles, motor de movimiento/reordenamiento,
validación, historial de snapshots y persistencia clave-valor.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
