"""
Entity collection registry

Every entity type is a flat JSON record kept in its own storage slot.
This module names the slots, the URL segment each collection is exposed
under, the validation schema applied to writes and the permission module
that guards it.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    storage_key: str
    route: str
    schema: Optional[str]
    module: str
    label: str


COLLECTIONS = (
    CollectionSpec('warehouses', 'warehouses', 'warehouses', 'warehouse', 'warehouses', 'Almacenes'),
    CollectionSpec('machinery', 'machinery', 'machinery', 'machinery', 'machinery', 'Maquinaria'),
    CollectionSpec('vehicles', 'vehicles', 'vehicles', 'vehicle', 'vehicles', 'Vehículos'),
    CollectionSpec('tools', 'tools', 'tools', 'tool', 'tools', 'Herramientas'),
    CollectionSpec('spareParts', 'spareParts', 'spareparts', 'sparePart', 'spareparts', 'Repuestos'),
    CollectionSpec('alerts', 'alerts', 'alerts', None, 'alerts', 'Alertas'),
    CollectionSpec('rentals', 'rentals', 'rentals', 'rental', 'rentals', 'Alquileres'),
    CollectionSpec('fuelRecords', 'fuelRecords', 'fuel', 'fuel', 'fuel', 'Combustible'),
    CollectionSpec('maintenanceRecords', 'maintenanceRecords', 'maintenance', 'maintenance', 'maintenance', 'Mantenimiento'),
    CollectionSpec('financialRecords', 'financialRecords', 'finance', 'financial', 'finance', 'Finanzas'),
    CollectionSpec('users', 'users', 'users', 'user', 'users', 'Usuarios'),
)

COLLECTIONS_BY_NAME: Dict[str, CollectionSpec] = {spec.name: spec for spec in COLLECTIONS}
COLLECTIONS_BY_ROUTE: Dict[str, CollectionSpec] = {spec.route: spec for spec in COLLECTIONS}

NOTIFICATIONS_KEY = 'notifications'

# Status enumerations
ASSET_STATUSES = ('disponible', 'alquilado', 'mantenimiento', 'fuera_servicio')
TOOL_STATUSES = ('disponible', 'no_disponible', 'mantenimiento', 'perdido')
CONDITIONS = ('excelente', 'bueno', 'regular', 'malo')
RENTAL_STATUSES = ('cotizado', 'confirmado', 'activo', 'completado', 'cancelado')
PAYMENT_STATUSES = ('pendiente', 'parcial', 'pagado', 'vencido')
MAINTENANCE_STATUSES = ('programado', 'en_progreso', 'completado', 'cancelado')
FINANCIAL_TYPES = ('ingreso', 'egreso')
ALERT_SEVERITIES = ('low', 'medium', 'high', 'critical')
USER_ROLES = ('admin', 'warehouse', 'mechanic', 'accountant', 'viewer')

# Seed data returned while the warehouses slot has never been written
INITIAL_WAREHOUSES = [
    {
        'id': '1',
        'name': 'Almacén Principal Lima',
        'address': 'Av. Industrial 123',
        'city': 'Lima',
        'createdAt': '2024-01-15T00:00:00',
        'createdBy': 'admin'
    }
]

INITIAL_DATA = {
    'warehouses': INITIAL_WAREHOUSES,
}


def get_collection(name_or_route: str) -> Optional[CollectionSpec]:
    """Look a collection up by store name or URL segment."""
    return COLLECTIONS_BY_NAME.get(name_or_route) or COLLECTIONS_BY_ROUTE.get(name_or_route)
