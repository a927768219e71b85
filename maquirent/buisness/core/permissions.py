"""
Role-based permission defaults.

A permission grants a set of actions on one module; the special module
'all' grants the actions on every module.
"""

from typing import Any, Dict, Iterable, List

ACTIONS = ('create', 'read', 'update', 'delete')
ALL_MODULES = 'all'

MODULES = {
    'dashboard': 'Vista general del sistema',
    'warehouses': 'Gestión de ubicaciones',
    'machinery': 'Equipos pesados',
    'vehicles': 'Flota vehicular',
    'tools': 'Herramientas y equipos menores',
    'spareparts': 'Inventario de repuestos',
    'fuel': 'Registro de cargas de combustible',
    'maintenance': 'Mantenimientos preventivos y correctivos',
    'rentals': 'Gestión de alquileres',
    'finance': 'Ingresos, gastos y reportes financieros',
    'reports': 'Reportes y análisis',
    'alerts': 'Notificaciones del sistema',
    'users': 'Gestión de usuarios (solo admin)',
    'settings': 'Configuración del sistema (solo admin)',
}

_CRUD = ['create', 'read', 'update', 'delete']

ROLE_DEFAULTS: Dict[str, List[Dict[str, Any]]] = {
    'admin': [
        {'module': ALL_MODULES, 'actions': _CRUD},
    ],
    'warehouse': [
        {'module': 'dashboard', 'actions': ['read']},
        {'module': 'warehouses', 'actions': ['read', 'update']},
        {'module': 'machinery', 'actions': ['read']},
        {'module': 'vehicles', 'actions': ['read']},
        {'module': 'tools', 'actions': _CRUD},
        {'module': 'spareparts', 'actions': _CRUD},
        {'module': 'fuel', 'actions': ['create', 'read']},
        {'module': 'alerts', 'actions': ['read']},
    ],
    'mechanic': [
        {'module': 'dashboard', 'actions': ['read']},
        {'module': 'machinery', 'actions': ['read', 'update']},
        {'module': 'vehicles', 'actions': ['read', 'update']},
        {'module': 'tools', 'actions': ['read']},
        {'module': 'spareparts', 'actions': ['read']},
        {'module': 'fuel', 'actions': ['create', 'read']},
        {'module': 'maintenance', 'actions': ['create', 'read', 'update']},
        {'module': 'alerts', 'actions': ['read']},
    ],
    'accountant': [
        {'module': 'dashboard', 'actions': ['read']},
        {'module': 'machinery', 'actions': ['read']},
        {'module': 'vehicles', 'actions': ['read']},
        {'module': 'rentals', 'actions': ['read', 'update']},
        {'module': 'finance', 'actions': _CRUD},
        {'module': 'reports', 'actions': ['read']},
        {'module': 'alerts', 'actions': ['read']},
    ],
    'viewer': [
        {'module': 'dashboard', 'actions': ['read']},
        {'module': 'machinery', 'actions': ['read']},
        {'module': 'vehicles', 'actions': ['read']},
        {'module': 'tools', 'actions': ['read']},
        {'module': 'spareparts', 'actions': ['read']},
        {'module': 'reports', 'actions': ['read']},
    ],
}


def default_permissions(role: str) -> List[Dict[str, Any]]:
    """Copy of the default permission list for role (empty for unknown roles)."""
    return [{'module': p['module'], 'actions': list(p['actions'])} for p in ROLE_DEFAULTS.get(role, [])]


def has_permission(permissions: Iterable[Dict[str, Any]], module: str, action: str) -> bool:
    for permission in permissions or []:
        if permission.get('module') in (module, ALL_MODULES) and action in permission.get('actions', []):
            return True
    return False


def user_can(user: Dict[str, Any], module: str, action: str) -> bool:
    """Check a user record, falling back to its role defaults when it has no explicit permissions."""
    permissions = user.get('permissions') or default_permissions(user.get('role', ''))
    return has_permission(permissions, module, action)
